"""Nested records shared by Gitea webhook payloads.

Field names mirror Gitea's JSON exactly (see ``modules/structs`` in the Gitea
source). Every field has a default so that a key the server omits decodes to
its zero value, and nested objects decode to ``None`` when absent.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from giteahook.payloads.timestamps import Timestamp


class GiteaModel(BaseModel):
    """Base for all decoded Gitea records.

    Records are immutable once decoded and ignore keys they do not know.
    A JSON ``null`` is treated the same as a missing key.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# ============================================================================
# Users
# ============================================================================


class User(GiteaModel):
    """A Gitea user or organization."""

    id: int = 0
    login: str = ""
    full_name: str = ""
    email: str = ""
    avatar_url: str = ""
    language: str = ""
    is_admin: bool = False
    last_login: Timestamp = None
    created: Timestamp = None
    restricted: bool = False
    active: bool = False
    prohibit_login: bool = False
    location: str = ""
    website: str = ""
    description: str = ""
    visibility: str = ""
    followers_count: int = 0
    following_count: int = 0
    starred_repos_count: int = 0


class PayloadUser(GiteaModel):
    """Author or committer of a pushed commit."""

    name: str = ""
    email: str = ""
    username: str = ""


# ============================================================================
# Commits
# ============================================================================


class CommitUser(GiteaModel):
    """Git identity attached to a commit, with its signature date."""

    name: str = ""
    email: str = ""
    date: Timestamp = None


class CommitMeta(GiteaModel):
    url: str = ""
    sha: str = ""
    created: Timestamp = None


class CommitAffectedFiles(GiteaModel):
    filename: str = ""


class RepoCommit(GiteaModel):
    url: str = ""
    author: CommitUser | None = None
    committer: CommitUser | None = None
    message: str = ""
    tree: CommitMeta | None = None


class Commit(GiteaModel):
    """A commit as returned by the repository commits API."""

    url: str = ""
    sha: str = ""
    created: Timestamp = None
    html_url: str = ""
    commit: RepoCommit | None = None
    author: User | None = None
    committer: User | None = None
    parents: list[CommitMeta] = Field(default_factory=list)
    files: list[CommitAffectedFiles] = Field(default_factory=list)


class PayloadCommitVerification(GiteaModel):
    """GPG verification status of a pushed commit."""

    verified: bool = False
    reason: str = ""
    signature: str = ""
    signer: PayloadUser | None = None
    payload: str = ""


class PayloadCommit(GiteaModel):
    """A commit listed in a push payload."""

    id: str = ""
    message: str = ""
    url: str = ""
    author: PayloadUser | None = None
    committer: PayloadUser | None = None
    verification: PayloadCommitVerification | None = None
    timestamp: Timestamp = None
    added: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)
    modified: list[str] = Field(default_factory=list)


# ============================================================================
# Repositories
# ============================================================================


class Permission(GiteaModel):
    admin: bool = False
    push: bool = False
    pull: bool = False


class InternalTracker(GiteaModel):
    """Settings of the built-in issue tracker."""

    enable_time_tracker: bool = False
    allow_only_contributors_to_track_time: bool = False
    enable_issue_dependencies: bool = False


class ExternalTracker(GiteaModel):
    """Settings of an external issue tracker.

    ``external_tracker_format`` may use the ``{user}``, ``{repo}`` and
    ``{index}`` placeholders.
    """

    external_tracker_url: str = ""
    external_tracker_format: str = ""
    external_tracker_style: str = ""


class ExternalWiki(GiteaModel):
    external_wiki_url: str = ""


class Repository(GiteaModel):
    """A Gitea repository."""

    id: int = 0
    owner: User | None = None
    name: str = ""
    full_name: str = ""
    description: str = ""
    empty: bool = False
    private: bool = False
    fork: bool = False
    template: bool = False
    parent: "Repository | None" = None
    mirror: bool = False
    size: int = 0
    html_url: str = ""
    ssh_url: str = ""
    clone_url: str = ""
    original_url: str = ""
    website: str = ""
    stars_count: int = 0
    forks_count: int = 0
    watchers_count: int = 0
    open_issues_count: int = 0
    open_pr_counter: int = 0
    release_counter: int = 0
    default_branch: str = ""
    archived: bool = False
    created_at: Timestamp = None
    updated_at: Timestamp = None
    permissions: Permission | None = None
    has_issues: bool = False
    internal_tracker: InternalTracker | None = None
    external_tracker: ExternalTracker | None = None
    has_wiki: bool = False
    external_wiki: ExternalWiki | None = None
    has_pull_requests: bool = False
    has_projects: bool = False
    ignore_whitespace_conflicts: bool = False
    allow_merge_commits: bool = False
    allow_rebase: bool = False
    allow_rebase_explicit: bool = False
    allow_squash_merge: bool = False
    avatar_url: str = ""
    internal: bool = False
    mirror_interval: str = ""
    default_merge_style: str = ""


class RepositoryMeta(GiteaModel):
    """Short repository reference embedded in issues."""

    id: int = 0
    name: str = ""
    owner: str = ""
    full_name: str = ""


# ============================================================================
# Releases
# ============================================================================


class Attachment(GiteaModel):
    id: int = 0
    name: str = ""
    size: int = 0
    download_count: int = 0
    created_at: Timestamp = None
    uuid: str = ""
    browser_download_url: str = ""


class Release(GiteaModel):
    id: int = 0
    tag_name: str = ""
    target_commitish: str = ""
    name: str = ""
    body: str = ""
    url: str = ""
    html_url: str = ""
    tarball_url: str = ""
    zipball_url: str = ""
    draft: bool = False
    prerelease: bool = False
    created_at: Timestamp = None
    published_at: Timestamp = None
    author: User | None = None
    assets: list[Attachment] = Field(default_factory=list)


# ============================================================================
# Issues and pull requests
# ============================================================================


class Label(GiteaModel):
    id: int = 0
    name: str = ""
    color: str = ""  # hex without leading '#', e.g. 00aabb
    description: str = ""
    url: str = ""


class Milestone(GiteaModel):
    id: int = 0
    title: str = ""
    description: str = ""
    state: str = ""
    open_issues: int = 0
    closed_issues: int = 0
    created_at: Timestamp = None
    updated_at: Timestamp = None
    closed_at: Timestamp = None
    due_on: Timestamp = None


class PullRequestMeta(GiteaModel):
    """Merge state attached to issues that are pull requests."""

    merged: bool = False
    merged_at: Timestamp = None


class Issue(GiteaModel):
    """An issue, or the issue side of a pull request."""

    id: int = 0
    url: str = ""
    html_url: str = ""
    number: int = 0
    user: User | None = None
    original_author: str = ""
    original_author_id: int = 0
    title: str = ""
    body: str = ""
    ref: str = ""
    labels: list[Label] = Field(default_factory=list)
    milestone: Milestone | None = None
    assignees: list[User] = Field(default_factory=list)
    state: str = ""
    is_locked: bool = False
    comments: int = 0
    created_at: Timestamp = None
    updated_at: Timestamp = None
    closed_at: Timestamp = None
    due_date: Timestamp = None
    pull_request: PullRequestMeta | None = None
    repository: RepositoryMeta | None = None


class PRBranchInfo(GiteaModel):
    """One side (base or head) of a pull request."""

    label: str = ""
    ref: str = ""
    sha: str = ""
    repo_id: int = 0
    repo: Repository | None = None


class PullRequest(GiteaModel):
    id: int = 0
    url: str = ""
    number: int = 0
    user: User | None = None
    title: str = ""
    body: str = ""
    labels: list[Label] = Field(default_factory=list)
    milestone: Milestone | None = None
    assignee: User | None = None
    assignees: list[User] = Field(default_factory=list)
    state: str = ""
    is_locked: bool = False
    comments: int = 0

    html_url: str = ""
    diff_url: str = ""
    patch_url: str = ""

    mergeable: bool = False
    merged: bool = False
    merged_at: Timestamp = None
    merge_commit_sha: str | None = None
    merged_by: User | None = None

    base: PRBranchInfo | None = None
    head: PRBranchInfo | None = None
    merge_base: str = ""

    due_date: Timestamp = None
    created_at: Timestamp = None
    updated_at: Timestamp = None
    closed_at: Timestamp = None


class Comment(GiteaModel):
    """A comment on an issue or pull request."""

    id: int = 0
    html_url: str = ""
    pull_request_url: str = ""
    issue_url: str = ""
    user: User | None = None
    original_author: str = ""
    original_author_id: int = 0
    body: str = ""
    created_at: Timestamp = None
    updated_at: Timestamp = None


# ============================================================================
# Change tracking
# ============================================================================


class ChangesFromPayload(GiteaModel):
    """Previous value of an edited field."""

    from_: str = Field(default="", alias="from")


class ChangesPayload(GiteaModel):
    title: ChangesFromPayload | None = None
    body: ChangesFromPayload | None = None
    ref: ChangesFromPayload | None = None


class ReviewPayload(GiteaModel):
    type: str = ""
    content: str = ""
