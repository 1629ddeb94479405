# -----------------------------------------------------------------------------
# hunkscope - Dual Licensed Software
# Copyright (c) 2025 Adem Can
#
# This file is part of hunkscope.
#
# hunkscope is available under a dual-license:
#   1. AGPLv3 (Affero General Public License v3)
#      - See LICENSE.txt and LICENSE-AGPL.txt
#      - Online: https://www.gnu.org/licenses/agpl-3.0.html
#
#   2. Commercial License
#      - For proprietary or revenue-generating use,
#        including SaaS, embedding in closed-source software,
#        or avoiding AGPL obligations.
#      - See LICENSE.txt and COMMERCIAL-LICENSE.txt
#      - Contact: ademfcan@gmail.com
#
# By using this file, you agree to the terms of one of the two licenses above.
# -----------------------------------------------------------------------------


from pathlib import Path

from platformdirs import user_config_dir, user_data_dir, user_log_path

APP_NAME = "hunkscope"
ENV_APP_PREFIX = APP_NAME.upper() + "_"
LOG_DIR = Path(user_log_path(appname=APP_NAME))
DATA_DIR = Path(user_data_dir(appname=APP_NAME))

CONFIG_FILENAME = "hunkscopeconfig.toml"

GLOBAL_CONFIG_FILE = Path(user_config_dir(APP_NAME)) / CONFIG_FILENAME
LOCAL_CONFIG_FILE = Path(CONFIG_FILENAME)

# hunks with more lines than this are offered to the agent for splitting
HUNK_LINE_THRESHOLD = 100

# PR descriptions are cut to this many characters before going into a prompt
PR_BODY_LIMIT = 2000

# keep gh / codex output plain and non-interactive
TOOL_ENV = {
    "GH_PAGER": "cat",
    "PAGER": "cat",
    "NO_COLOR": "1",
    "GH_FORCE_TTY": "0",
}

PR_LIST_FIELDS = (
    "number,title,author,updatedAt,url,headRefName,baseRefName,reviewDecision,body"
)
