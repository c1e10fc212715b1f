"""Typed payload schemas for Gitea webhook events.

This module provides:
- Timestamp: tolerant multi-format timestamp field type
- Nested records (User, Repository, Issue, PullRequest, ...)
- One payload model per supported event kind
- PAYLOAD_TYPES: dispatch table from event kind to payload model
"""

from giteahook.payloads.events import (
    PAYLOAD_TYPES,
    CreatePayload,
    DeletePayload,
    ForkPayload,
    GiteaPayload,
    HookIssueAction,
    HookIssueCommentAction,
    HookReleaseAction,
    HookRepoAction,
    IssueCommentPayload,
    IssuePayload,
    Payload,
    PullRequestPayload,
    PushPayload,
    PusherType,
    ReleasePayload,
    RepositoryPayload,
)
from giteahook.payloads.models import (
    Attachment,
    ChangesFromPayload,
    ChangesPayload,
    Commit,
    CommitAffectedFiles,
    CommitMeta,
    CommitUser,
    Comment,
    ExternalTracker,
    ExternalWiki,
    GiteaModel,
    InternalTracker,
    Issue,
    Label,
    Milestone,
    PayloadCommit,
    PayloadCommitVerification,
    PayloadUser,
    Permission,
    PRBranchInfo,
    PullRequest,
    PullRequestMeta,
    Release,
    RepoCommit,
    Repository,
    RepositoryMeta,
    ReviewPayload,
    User,
)
from giteahook.payloads.timestamps import TIMESTAMP_LAYOUTS, Timestamp, parse_timestamp

__all__ = [
    # Payloads
    "PAYLOAD_TYPES",
    "CreatePayload",
    "DeletePayload",
    "ForkPayload",
    "GiteaPayload",
    "IssueCommentPayload",
    "IssuePayload",
    "Payload",
    "PullRequestPayload",
    "PushPayload",
    "ReleasePayload",
    "RepositoryPayload",
    # Actions
    "HookIssueAction",
    "HookIssueCommentAction",
    "HookReleaseAction",
    "HookRepoAction",
    "PusherType",
    # Records
    "Attachment",
    "ChangesFromPayload",
    "ChangesPayload",
    "Commit",
    "CommitAffectedFiles",
    "CommitMeta",
    "CommitUser",
    "Comment",
    "ExternalTracker",
    "ExternalWiki",
    "GiteaModel",
    "InternalTracker",
    "Issue",
    "Label",
    "Milestone",
    "PayloadCommit",
    "PayloadCommitVerification",
    "PayloadUser",
    "Permission",
    "PRBranchInfo",
    "PullRequest",
    "PullRequestMeta",
    "Release",
    "RepoCommit",
    "Repository",
    "RepositoryMeta",
    "ReviewPayload",
    "User",
    # Timestamps
    "TIMESTAMP_LAYOUTS",
    "Timestamp",
    "parse_timestamp",
]
