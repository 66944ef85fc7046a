# SPDX-License-Identifier: GPL-3.0-or-later

from typing import List, Optional

import requests

from mirror import DestinationRepository, DestinationUser, MirrorRequest, Result
from mirror.config import Config


def _valid_name(name: str) -> bool:
    # Names end up in the request path
    return bool(name) and '/' not in name and name not in ('.', '..')


class Client:
    _session: requests.Session
    _host: str

    def __init__(self, host: str, token: str,
                 session: Optional[requests.Session] = None) -> None:
        self._host = host
        self._session = session or requests.Session()
        self._session.headers.update({
            'Authorization': f'token {token}',
            'Content-Type': 'application/json',
        })

    def _url(self, *parts: str) -> str:
        return '/'.join((self._host, 'api/v1') + parts)

    def _get_json(self, *parts: str):
        r = self._session.get(self._url(*parts))
        r.raise_for_status()
        return r.json()

    def list_repositories(self, username: str) -> Result[List[DestinationRepository]]:
        print(f"Fetching Gitea repositories of {username}")
        if not _valid_name(username):
            return Result.failure(f"Invalid Gitea username: {username!r}", [])

        try:
            repos = [DestinationRepository(r['id'], r['name'], r.get('description') or '',
                                           bool(r.get('mirror')))
                     for r in self._get_json('users', username, 'repos')]
        except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
            return Result.failure(f"Failed to list Gitea repositories of {username}: {e}", [])

        return Result.success(repos)

    def get_user(self, username: str) -> Result[DestinationUser]:
        if not _valid_name(username):
            return Result.failure(f"Invalid Gitea username: {username!r}", DestinationUser())

        try:
            user = DestinationUser(int(self._get_json('users', username)['id']))
        except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
            return Result.failure(f"Failed to look up Gitea user {username}: {e}",
                                  DestinationUser())

        return Result.success(user)

    def create_mirror(self, request: MirrorRequest) -> bool:
        try:
            r = self._session.post(self._url('repos', 'migrate'), json=request.as_json())
        except requests.RequestException as e:
            print(f"ERROR: Failed to create mirror {request.name}: {e}")
            return False

        if r.status_code != requests.codes.created:
            print(f"ERROR: Failed to create mirror {request.name}: HTTP {r.status_code}")
            return False

        return True

    def trigger_sync(self, username: str, repo_name: str) -> bool:
        if not (_valid_name(username) and _valid_name(repo_name)):
            print(f"ERROR: Refusing to sync {username}/{repo_name}: invalid name")
            return False

        try:
            r = self._session.post(self._url('repos', username, repo_name, 'mirror-sync'))
        except requests.RequestException as e:
            print(f"ERROR: Failed to sync {repo_name}: {e}")
            return False

        if r.status_code != requests.codes.ok:
            print(f"ERROR: Failed to sync {repo_name}: HTTP {r.status_code}")
            return False

        return True


def create_client(config: Config) -> Client:
    return Client(config.gitea_host, config.gitea_token)
