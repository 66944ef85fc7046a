# SPDX-License-Identifier: GPL-3.0-or-later

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from urllib3.exceptions import LocationParseError
from urllib3.util import parse_url


def _normalize_host(host: str) -> str:
    if not host:
        return ''

    url = host
    if '://' not in url:
        # Gitea instances are almost always served over HTTPS
        url = 'https://' + url

    try:
        parsed = parse_url(url)
    except LocationParseError:
        print(f"WARNING: Cannot parse GITEA_HOST {host!r}, using it as is")
        return host

    # Drop trailing slashes so API paths can be appended directly
    return parsed._replace(path=(parsed.path or '').rstrip('/') or None).url


@dataclass(frozen=True)
class Config:
    gitea_host: str
    gitea_token: str
    gitea_username: str
    github_username: str
    # Optional, only needed to mirror private GitHub repositories
    github_token: str = ''

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'Config':
        if env is None:
            env = os.environ

        # Missing values are passed through as empty strings
        return cls(_normalize_host(env.get('GITEA_HOST', '')),
                   env.get('GITEA_TOKEN', ''),
                   env.get('GITEA_USERNAME', ''),
                   env.get('GITHUB_USERNAME', ''),
                   env.get('GITHUB_TOKEN', ''))

    @staticmethod
    def _mask(secret: str) -> str:
        if len(secret) <= 4:
            return '*' * len(secret)
        return secret[:4] + '*' * (len(secret) - 4)

    def describe(self):
        return [
            ('GITEA_HOST', self.gitea_host),
            ('GITEA_TOKEN', self._mask(self.gitea_token)),
            ('GITEA_USERNAME', self.gitea_username),
            ('GITHUB_USERNAME', self.github_username),
            ('GITHUB_TOKEN', self._mask(self.github_token)),
        ]
