#!/usr/bin/env python3
# SPDX-License-Identifier: GPL-3.0-or-later

import argparse

import mirror.hub
import mirror.tea
from mirror.config import Config
from mirror.reconcile import Reconciler


def main(argv=None):
    parser = argparse.ArgumentParser(description="Mirror GitHub repositories to Gitea")
    parser.add_argument('--action', choices=['mirror', 'sync'], default='mirror',
                        help="Create missing mirrors (mirror) or sync existing mirrors (sync)")
    args = parser.parse_args(argv)

    print(f"Action {args.action}")
    config = Config.from_env()
    for key, value in config.describe():
        print(f"{key}: {value}")

    reconciler = Reconciler(mirror.hub.create_client(config), mirror.tea.create_client(config))

    if args.action == 'mirror':
        report = reconciler.reconcile(config.github_username, config.gitea_username)
    else:
        report = reconciler.sync_all(config.gitea_username)

    print(f"Done: {report}")


if __name__ == '__main__':
    main()
