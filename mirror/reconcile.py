# SPDX-License-Identifier: GPL-3.0-or-later

from typing import Iterable, List, Sequence, Tuple

from mirror import (DestinationRepository, DestinationUser, MirrorRequest, Report, Result,
                    SourceRepository)
import mirror.hub
import mirror.tea


def compute_missing_mirrors(source_repos: Sequence[SourceRepository],
                            dest_repos: Iterable[DestinationRepository]) -> List[SourceRepository]:
    """Return the source repositories that have no destination repository
    with the same name, in source order.

    Only the name is compared: description and URL differences are ignored.
    """
    existing = {r.name for r in dest_repos}
    return [r for r in source_repos if r.name not in existing]


def build_request(repo: SourceRepository, user: DestinationUser,
                  auth: Tuple[str, str] = ('', '')) -> MirrorRequest:
    auth_username, auth_password = auth
    return MirrorRequest(name=repo.name, description=repo.description,
                         clone_addr=repo.clone_url, repo_name=repo.name, uid=user.id,
                         auth_username=auth_username, auth_password=auth_password)


def _unwrap(result: Result):
    # A failed read is treated as an empty (or zero) result, the run continues
    if not result.ok:
        print(f"ERROR: {result.error}")
    return result.value


class Reconciler:
    _source: mirror.hub.Client
    _dest: mirror.tea.Client

    def __init__(self, source: mirror.hub.Client, dest: mirror.tea.Client) -> None:
        self._source = source
        self._dest = dest

    def reconcile(self, source_username: str, dest_username: str) -> Report:
        source_repos = _unwrap(self._source.list_repositories(source_username))
        dest_repos = _unwrap(self._dest.list_repositories(dest_username))
        missing = compute_missing_mirrors(source_repos, dest_repos)

        report = Report()
        if not missing:
            return report

        # All mirrors are owned by the same account
        user = _unwrap(self._dest.get_user(dest_username))
        for repo in missing:
            print(f"Name: {repo.name}")
            print(f"Clone url: {repo.clone_url}")
            print(f"Description: {repo.description}")

            request = build_request(repo, user, self._source.auth_for(repo))
            success = self._dest.create_mirror(request)
            if success:
                print(f"{repo.name} mirror created")
            report.record(repo.name, success)

        return report

    def sync_all(self, dest_username: str) -> Report:
        report = Report()
        for repo in _unwrap(self._dest.list_repositories(dest_username)):
            if not repo.mirror:
                continue

            print(f"Syncing {repo.name}...")
            success = self._dest.trigger_sync(dest_username, repo.name)
            if success:
                print(f"{repo.name} Synced")
            report.record(repo.name, success)

        return report
