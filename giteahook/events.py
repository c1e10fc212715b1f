"""Gitea webhook event kinds.

The event kind of a delivery is sent in the ``X-Gitea-Event`` header.
"""

from enum import Enum


class GiteaEvent(str, Enum):
    """Every event kind a Gitea server can deliver.

    Events are organized by category:
    - ref events: create, delete, push
    - repository events: fork, repository, release
    - issue events: issues, issue_*
    - pull request events: pull_request, pull_request_*
    """

    # Ref events
    CREATE = "create"
    DELETE = "delete"
    PUSH = "push"

    # Repository events
    FORK = "fork"
    REPOSITORY = "repository"
    RELEASE = "release"

    # Issue events
    ISSUES = "issues"
    ISSUE_ASSIGN = "issue_assign"
    ISSUE_LABEL = "issue_label"
    ISSUE_MILESTONE = "issue_milestone"
    ISSUE_COMMENT = "issue_comment"

    # Pull request events
    PULL_REQUEST = "pull_request"
    PULL_REQUEST_ASSIGN = "pull_request_assign"
    PULL_REQUEST_LABEL = "pull_request_label"
    PULL_REQUEST_MILESTONE = "pull_request_milestone"
    PULL_REQUEST_COMMENT = "pull_request_comment"
    PULL_REQUEST_REVIEW_APPROVED = "pull_request_review_approved"
    PULL_REQUEST_REVIEW_REJECTED = "pull_request_review_rejected"
    PULL_REQUEST_REVIEW_COMMENT = "pull_request_review_comment"
    PULL_REQUEST_SYNC = "pull_request_sync"

    @classmethod
    def lookup(cls, value: str) -> "GiteaEvent | None":
        """Return the member for a header value, or None if unrecognized."""
        try:
            return cls(value)
        except ValueError:
            return None
