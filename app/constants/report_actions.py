"""Report action kinds and the fixed sets the engine classifies them by."""

from enum import StrEnum


class ReportActionName(StrEnum):
    """Discriminant of a report action (``actionName`` on the wire)."""

    ACTIONABLE_ADD_PAYMENT_CARD = "ACTIONABLEADDPAYMENTCARD"
    ACTIONABLE_JOIN_REQUEST = "ACTIONABLEJOINREQUEST"
    ACTIONABLE_MENTION_WHISPER = "ACTIONABLEMENTIONWHISPER"
    ACTIONABLE_REPORT_MENTION_WHISPER = "ACTIONABLEREPORTMENTIONWHISPER"
    ACTIONABLE_TRACK_EXPENSE_WHISPER = "ACTIONABLETRACKEXPENSEWHISPER"
    ADD_COMMENT = "ADDCOMMENT"
    APPROVED = "APPROVED"
    CHANGE_FIELD = "CHANGEFIELD"
    CHANGE_POLICY = "CHANGEPOLICY"
    CHANGE_TYPE = "CHANGETYPE"
    CHRONOS_OOO_LIST = "CHRONOSOOOLIST"
    CLOSED = "CLOSED"
    CREATED = "CREATED"
    DELEGATE_SUBMIT = "DELEGATESUBMIT"
    DELETED_ACCOUNT = "DELETEDACCOUNT"
    DISMISSED_VIOLATION = "DISMISSEDVIOLATION"
    DONATION = "DONATION"
    EXPORTED_TO_CSV = "EXPORTCSV"
    EXPORTED_TO_INTEGRATION = "EXPORTINTEGRATION"
    EXPORTED_TO_QUICK_BOOKS = "EXPORTED"
    FORWARDED = "FORWARDED"
    HOLD = "HOLD"
    HOLD_COMMENT = "HOLDCOMMENT"
    INTEGRATIONS_MESSAGE = "INTEGRATIONSMESSAGE"
    IOU = "IOU"
    MANAGER_ATTACH_RECEIPT = "MANAGERATTACHRECEIPT"
    MANAGER_DETACH_RECEIPT = "MANAGERDETACHRECEIPT"
    MARKED_REIMBURSED = "MARKEDREIMBURSED"
    MARK_REIMBURSED_FROM_INTEGRATION = "MARKREIMBURSEDFROMINTEGRATION"
    MERGED_WITH_CASH_TRANSACTION = "MERGEDWITHCASHTRANSACTION"
    MODIFIED_EXPENSE = "MODIFIEDEXPENSE"
    MOVED = "MOVED"
    OUTDATED_BANK_ACCOUNT = "OUTDATEDBANKACCOUNT"
    REIMBURSEMENT_ACH_BOUNCE = "REIMBURSEMENTACHBOUNCE"
    REIMBURSEMENT_ACH_CANCELLED = "REIMBURSEMENTACHCANCELLED"
    REIMBURSEMENT_ACCOUNT_CHANGED = "REIMBURSEMENTACCOUNTCHANGED"
    REIMBURSEMENT_DELAYED = "REIMBURSEMENTDELAYED"
    REIMBURSEMENT_DEQUEUED = "REIMBURSEMENTDEQUEUED"
    REIMBURSEMENT_QUEUED = "REIMBURSEMENTQUEUED"
    REIMBURSEMENT_REQUESTED = "REIMBURSEMENTREQUESTED"
    REIMBURSEMENT_SETUP = "REIMBURSEMENTSETUP"
    REIMBURSEMENT_SETUP_REQUESTED = "REIMBURSEMENTSETUPREQUESTED"
    RENAMED = "RENAMED"
    REPORT_PREVIEW = "REPORTPREVIEW"
    SELECTED_FOR_RANDOM_AUDIT = "SELECTEDFORRANDOMAUDIT"
    SHARE = "SHARE"
    STRIPE_PAID = "STRIPEPAID"
    SUBMITTED = "SUBMITTED"
    TAKE_CONTROL = "TAKECONTROL"
    TASK_CANCELLED = "TASKCANCELLED"
    TASK_COMPLETED = "TASKCOMPLETED"
    TASK_EDITED = "TASKEDITED"
    TASK_REOPENED = "TASKREOPENED"
    TRIP_PREVIEW = "TRIPPREVIEW"
    UNAPPROVED = "UNAPPROVED"
    UNHOLD = "UNHOLD"
    UNSHARE = "UNSHARE"
    UPDATE_GROUP_CHAT_MEMBER_ROLE = "UPDATEGROUPCHATMEMBERROLE"


class PolicyChangeLogName(StrEnum):
    """Workspace change-log variants."""

    ADD_APPROVER_RULE = "POLICYCHANGELOG_ADD_APPROVER_RULE"
    ADD_CATEGORY = "POLICYCHANGELOG_ADD_CATEGORY"
    ADD_EMPLOYEE = "POLICYCHANGELOG_ADD_EMPLOYEE"
    ADD_TAG = "POLICYCHANGELOG_ADD_TAG"
    DELETE_ALL_TAGS = "POLICYCHANGELOG_DELETE_ALL_TAGS"
    DELETE_CATEGORY = "POLICYCHANGELOG_DELETE_CATEGORY"
    DELETE_EMPLOYEE = "POLICYCHANGELOG_DELETE_EMPLOYEE"
    DELETE_TAG = "POLICYCHANGELOG_DELETE_TAG"
    INVITE_TO_ROOM = "POLICYCHANGELOG_INVITETOROOM"
    LEAVE_POLICY = "POLICYCHANGELOG_LEAVEPOLICY"
    REMOVE_FROM_ROOM = "POLICYCHANGELOG_REMOVEFROMROOM"
    UPDATE_CATEGORY = "POLICYCHANGELOG_UPDATE_CATEGORY"
    UPDATE_CURRENCY = "POLICYCHANGELOG_UPDATE_CURRENCY"
    UPDATE_DESCRIPTION = "POLICYCHANGELOG_UPDATE_DESCRIPTION"
    UPDATE_EMPLOYEE = "POLICYCHANGELOG_UPDATE_EMPLOYEE"
    UPDATE_NAME = "POLICYCHANGELOG_UPDATE_NAME"
    UPDATE_TAG = "POLICYCHANGELOG_UPDATE_TAG"


class RoomChangeLogName(StrEnum):
    """Room change-log variants."""

    INVITE_TO_ROOM = "INVITETOROOM"
    LEAVE_ROOM = "LEAVEROOM"
    REMOVE_FROM_ROOM = "REMOVEFROMROOM"
    UPDATE_ROOM_DESCRIPTION = "UPDATEROOMDESCRIPTION"


class IOUActionType(StrEnum):
    """``originalMessage.type`` of an IOU action."""

    APPROVE = "approve"
    CANCEL = "cancel"
    CREATE = "create"
    DECLINE = "decline"
    DELETE = "delete"
    PAY = "pay"
    SPLIT = "split"
    TRACK = "track"


class PendingAction(StrEnum):
    """Unconfirmed local mutation carried by an optimistic record."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"


class ReportType(StrEnum):
    CHAT = "chat"
    EXPENSE = "expense"
    IOU = "iou"
    INVOICE = "invoice"
    TASK = "task"


class ChatType(StrEnum):
    DOMAIN_ALL = "domainAll"
    GROUP = "group"
    INVOICE = "invoice"
    POLICY_ADMINS = "policyAdmins"
    POLICY_ANNOUNCE = "policyAnnounce"
    POLICY_EXPENSE_CHAT = "policyExpenseChat"
    POLICY_ROOM = "policyRoom"
    SELF_DM = "selfDM"
    SYSTEM = "system"


class MessageFormat(StrEnum):
    """Which representation the server used for ``message``."""

    LIST = "list"
    OBJECT = "object"


MODERATOR_DECISION_PENDING_REMOVE = "pendingRemove"

MEMBER_CHANGE_ACTION_NAMES = frozenset(
    {
        RoomChangeLogName.INVITE_TO_ROOM,
        RoomChangeLogName.REMOVE_FROM_ROOM,
        PolicyChangeLogName.INVITE_TO_ROOM,
        PolicyChangeLogName.REMOVE_FROM_ROOM,
        PolicyChangeLogName.LEAVE_POLICY,
    }
)

INVITE_MEMBER_ACTION_NAMES = frozenset(
    {RoomChangeLogName.INVITE_TO_ROOM, PolicyChangeLogName.INVITE_TO_ROOM}
)

TASK_ACTION_NAMES = frozenset(
    {
        ReportActionName.TASK_COMPLETED,
        ReportActionName.TASK_CANCELLED,
        ReportActionName.TASK_REOPENED,
        ReportActionName.TASK_EDITED,
    }
)

NOTIFIABLE_ACTION_NAMES = frozenset(
    {
        ReportActionName.ADD_COMMENT,
        ReportActionName.IOU,
        ReportActionName.MODIFIED_EXPENSE,
    }
)

APPROVED_OR_SUBMITTED_ACTION_NAMES = frozenset(
    {ReportActionName.APPROVED, ReportActionName.SUBMITTED}
)

# Retired kinds that are never displayed.
DEPRECATED_ACTION_NAMES = frozenset(
    {
        ReportActionName.DELETED_ACCOUNT,
        ReportActionName.REIMBURSEMENT_REQUESTED,
        ReportActionName.REIMBURSEMENT_SETUP_REQUESTED,
        ReportActionName.DONATION,
    }
)

# Kinds produced by the legacy backend, rendered by concatenating fragments.
OLD_DOT_ACTION_NAMES = frozenset(
    {
        ReportActionName.CHANGE_FIELD,
        ReportActionName.CHANGE_POLICY,
        ReportActionName.CHANGE_TYPE,
        ReportActionName.DELEGATE_SUBMIT,
        ReportActionName.DELETED_ACCOUNT,
        ReportActionName.DONATION,
        ReportActionName.EXPORTED_TO_CSV,
        ReportActionName.EXPORTED_TO_INTEGRATION,
        ReportActionName.EXPORTED_TO_QUICK_BOOKS,
        ReportActionName.FORWARDED,
        ReportActionName.INTEGRATIONS_MESSAGE,
        ReportActionName.MANAGER_ATTACH_RECEIPT,
        ReportActionName.MANAGER_DETACH_RECEIPT,
        ReportActionName.MARKED_REIMBURSED,
        ReportActionName.MARK_REIMBURSED_FROM_INTEGRATION,
        ReportActionName.OUTDATED_BANK_ACCOUNT,
        ReportActionName.REIMBURSEMENT_ACH_BOUNCE,
        ReportActionName.REIMBURSEMENT_ACH_CANCELLED,
        ReportActionName.REIMBURSEMENT_ACCOUNT_CHANGED,
        ReportActionName.REIMBURSEMENT_DELAYED,
        ReportActionName.REIMBURSEMENT_REQUESTED,
        ReportActionName.REIMBURSEMENT_SETUP,
        ReportActionName.SELECTED_FOR_RANDOM_AUDIT,
        ReportActionName.SHARE,
        ReportActionName.STRIPE_PAID,
        ReportActionName.TAKE_CONTROL,
        ReportActionName.UNAPPROVED,
        ReportActionName.UNSHARE,
    }
)

SUPPORTED_ACTION_NAMES = frozenset(
    {*ReportActionName, *PolicyChangeLogName, *RoomChangeLogName}
)

ONE_TRANSACTION_REPORT_TYPES = frozenset(
    {ReportType.IOU, ReportType.EXPENSE, ReportType.INVOICE}
)

# IOU types that can own a transaction thread.
IOU_THREAD_ACTION_TYPES = frozenset(
    {IOUActionType.CREATE, IOUActionType.SPLIT, IOUActionType.PAY, IOUActionType.TRACK}
)

IOU_REQUEST_ACTION_TYPES = frozenset(
    {IOUActionType.CREATE, IOUActionType.SPLIT, IOUActionType.TRACK}
)

ATTACHMENT_MESSAGE_TEXT = "[Attachment]"
ATTACHMENT_UPLOADING_MESSAGE_HTML = "Uploading attachment..."
ATTACHMENT_SOURCE_ATTRIBUTE = "data-expensify-source"
ATTACHMENT_TRANSLATION_KEY = "common.attachment"

LAST_MESSAGE_TEXT_MAX_LENGTH = 200
CONSECUTIVE_ACTION_WINDOW_MS = 300000

# Earliest possible store timestamp.
EPOCH_DB_TIME = "1970-01-01 00:00:00.000"

BASE_URL_PLACEHOLDER = "%baseURL"
