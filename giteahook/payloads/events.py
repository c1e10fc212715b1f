"""Event payload shapes, one per supported Gitea event kind.

Each payload class carries its event kind in the ``event`` class variable so
decoded values can be told apart without inspecting their fields.
"""

from enum import Enum
from typing import ClassVar

from pydantic import Field

from giteahook.events import GiteaEvent
from giteahook.payloads.models import (
    ChangesPayload,
    Comment,
    GiteaModel,
    PayloadCommit,
    PullRequest,
    Release,
    Repository,
    ReviewPayload,
    User,
)
from giteahook.payloads.models import Issue as IssueRecord

# ============================================================================
# Action types
# ============================================================================


class PusherType(str, Enum):
    """Kind of actor behind a delete event."""

    USER = "user"


class HookIssueAction(str, Enum):
    """Actions reported by issue and pull request events."""

    OPENED = "opened"
    CLOSED = "closed"
    REOPENED = "reopened"
    EDITED = "edited"
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"
    LABEL_UPDATED = "label_updated"
    LABEL_CLEARED = "label_cleared"
    SYNCHRONIZED = "synchronized"
    MILESTONED = "milestoned"
    DEMILESTONED = "demilestoned"
    REVIEWED = "reviewed"


class HookIssueCommentAction(str, Enum):
    CREATED = "created"
    EDITED = "edited"
    DELETED = "deleted"


class HookReleaseAction(str, Enum):
    PUBLISHED = "published"
    UPDATED = "updated"
    DELETED = "deleted"


class HookRepoAction(str, Enum):
    CREATED = "created"
    DELETED = "deleted"


# ============================================================================
# Payloads
# ============================================================================


class GiteaPayload(GiteaModel):
    """Base for top-level event payloads."""

    event: ClassVar[GiteaEvent]


class CreatePayload(GiteaPayload):
    """A branch or tag was created."""

    event: ClassVar[GiteaEvent] = GiteaEvent.CREATE

    sha: str = ""
    ref: str = ""
    ref_type: str = ""
    repository: Repository | None = None
    sender: User | None = None


class DeletePayload(GiteaPayload):
    """A branch or tag was deleted."""

    event: ClassVar[GiteaEvent] = GiteaEvent.DELETE

    ref: str = ""
    ref_type: str = ""
    pusher_type: PusherType | str = Field(default="", union_mode="left_to_right")
    repository: Repository | None = None
    sender: User | None = None


class ForkPayload(GiteaPayload):
    """A repository was forked into ``forkee``."""

    event: ClassVar[GiteaEvent] = GiteaEvent.FORK

    forkee: Repository | None = None
    repository: Repository | None = None
    sender: User | None = None


class PushPayload(GiteaPayload):
    """Commits were pushed to a ref."""

    event: ClassVar[GiteaEvent] = GiteaEvent.PUSH

    ref: str = ""
    before: str = ""
    after: str = ""
    compare_url: str = ""
    commits: list[PayloadCommit] = Field(default_factory=list)
    head_commit: PayloadCommit | None = None
    repository: Repository | None = None
    pusher: User | None = None
    sender: User | None = None

    @property
    def branch(self) -> str:
        """Short branch or tag name of ``ref``."""
        for prefix in ("refs/heads/", "refs/tags/"):
            if self.ref.startswith(prefix):
                return self.ref[len(prefix):]
        return self.ref


class IssuePayload(GiteaPayload):
    event: ClassVar[GiteaEvent] = GiteaEvent.ISSUES

    action: HookIssueAction | str = Field(default="", union_mode="left_to_right")
    number: int = 0
    changes: ChangesPayload | None = None
    issue: IssueRecord | None = None
    repository: Repository | None = None
    sender: User | None = None


class IssueCommentPayload(GiteaPayload):
    """A comment was made on an issue or pull request.

    Decodable on its own, but not yet accepted by the verifier.
    """

    event: ClassVar[GiteaEvent] = GiteaEvent.ISSUE_COMMENT

    action: HookIssueCommentAction | str = Field(default="", union_mode="left_to_right")
    issue: IssueRecord | None = None
    comment: Comment | None = None
    changes: ChangesPayload | None = None
    repository: Repository | None = None
    sender: User | None = None
    is_pull: bool = False


class PullRequestPayload(GiteaPayload):
    event: ClassVar[GiteaEvent] = GiteaEvent.PULL_REQUEST

    action: HookIssueAction | str = Field(default="", union_mode="left_to_right")
    number: int = 0
    changes: ChangesPayload | None = None
    pull_request: PullRequest | None = None
    repository: Repository | None = None
    sender: User | None = None
    review: ReviewPayload | None = None


class RepositoryPayload(GiteaPayload):
    event: ClassVar[GiteaEvent] = GiteaEvent.REPOSITORY

    action: HookRepoAction | str = Field(default="", union_mode="left_to_right")
    repository: Repository | None = None
    organization: User | None = None
    sender: User | None = None


class ReleasePayload(GiteaPayload):
    event: ClassVar[GiteaEvent] = GiteaEvent.RELEASE

    action: HookReleaseAction | str = Field(default="", union_mode="left_to_right")
    release: Release | None = None
    repository: Repository | None = None
    sender: User | None = None


Payload = (
    CreatePayload
    | DeletePayload
    | ForkPayload
    | PushPayload
    | IssuePayload
    | PullRequestPayload
    | RepositoryPayload
    | ReleasePayload
)

# Dispatch table from event kind to payload shape. Kinds that Gitea emits but
# that are missing here are rejected as unimplemented.
PAYLOAD_TYPES: dict[GiteaEvent, type[GiteaPayload]] = {
    payload_type.event: payload_type
    for payload_type in (
        CreatePayload,
        DeletePayload,
        ForkPayload,
        PushPayload,
        IssuePayload,
        PullRequestPayload,
        RepositoryPayload,
        ReleasePayload,
    )
}
