# SPDX-License-Identifier: GPL-3.0-or-later

from typing import List, Optional, Tuple

import requests
from github3 import GitHub
from github3.exceptions import GitHubException

from mirror import Result, SourceRepository
from mirror.config import Config

# GitHub never returns more than 100 repositories per page.
# Only a single page is fetched, there is no pagination.
PER_PAGE = 100


class Client:
    _gh: GitHub
    # (username, token) used by Gitea to clone private repositories
    auth: Optional[Tuple[str, str]]

    def __init__(self, gh: GitHub, auth: Optional[Tuple[str, str]] = None) -> None:
        self._gh = gh
        self.auth = auth

    def _repositories(self, username: str):
        if self.auth:
            # /users/<name>/repos only lists public repositories,
            # the private ones are only visible to their (authenticated) owner
            login = self._gh.me().login
            if login.lower() == username.lower():
                return self._gh.repositories(type='owner', number=PER_PAGE)
            print(f"NOTE: GitHub token belongs to {login}, "
                  f"listing public repositories of {username}")
        return self._gh.repositories_by(username, number=PER_PAGE)

    def list_repositories(self, username: str) -> Result[List[SourceRepository]]:
        print(f"Fetching GitHub repositories of {username}")
        try:
            repos = [SourceRepository(r.name, r.clone_url, r.description or '',
                                      bool(r.private))
                     for r in self._repositories(username)]
        except (GitHubException, requests.RequestException, ValueError) as e:
            return Result.failure(f"Failed to list GitHub repositories of {username}: {e}", [])

        return Result.success(repos)

    def auth_for(self, repo: SourceRepository) -> Tuple[str, str]:
        # Public repositories are mirrored without credentials
        if repo.private and self.auth:
            return self.auth
        return '', ''


def create_client(config: Config) -> Client:
    gh = GitHub()
    if not config.github_token:
        return Client(gh)

    gh.login(token=config.github_token)
    return Client(gh, (config.github_username, config.github_token))
