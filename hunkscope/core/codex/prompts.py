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


from hunkscope.constants import PR_BODY_LIMIT

ANALYSIS_PROMPT = """Read hunks.json which contains {hunk_count} hunks and group ALL of them by change intent for PR review.{pr_context}
Every single hunk must be assigned to exactly one group, do not leave any hunk unassigned.
Use only existing hunk ids. Output must match the schema. Do not invent ids.
Order the groups array by logical processing flow (e.g. data model / schema first, then business logic, then API / controller, then UI, then tests, then config).
Give each group a clear, descriptive title that serves as a section heading for reviewers.
For overallSummary, write a concise reviewer-facing summary of WHAT the PR changes and WHY.
Do NOT mention hunks, hunks.json, grouping process, or analysis internals; write as if summarizing the PR itself.
Also classify each hunk as substantive or non-substantive.
Non-substantive changes are: formatting/whitespace-only changes, code moved to another file without modification, indentation changes, lock file updates, auto-generated code changes, snapshot updates.
Note: variable/function renames and comment changes ARE substantive.
List non-substantive hunk IDs in nonSubstantiveHunkIds.{lang_suffix}"""

REFINE_PROMPT = """Read hunks.json. These hunks all belong to a single intent group titled "{group_title}".
Split them into smaller, more focused sub-groups by specific change purpose.
Use only existing hunk ids from the input. Do not invent ids.
Sub-group ids must be "{group_id}.1", "{group_id}.2", etc.
Order sub-groups by logical processing flow.
Give each sub-group a clear, descriptive title.{lang_suffix}"""

SPLIT_PROMPT = """Read large_hunks.json. Each hunk has an id, filePath, and a lines array.
For each hunk, split it into semantic sub-hunks by change purpose.
Each sub-hunk must be a contiguous range of lines (0-based indices, endLineIndex is exclusive).
Sub-hunk ids must be "<originalId>.1", "<originalId>.2", etc.
The sub-hunks must cover all lines of the original hunk with no gaps or overlaps.
Give each sub-hunk a short descriptive title.
Output must match the schema.{lang_suffix}"""


def lang_suffix(lang: str | None) -> str:
    if lang and lang.strip():
        return f" Respond in {lang.strip()}."
    return ""


def pr_context(pr_body: str | None) -> str:
    if not pr_body or not pr_body.strip():
        return ""
    return f' The PR description is: "{pr_body[:PR_BODY_LIMIT]}".'


def build_analysis_prompt(
    hunk_count: int, pr_body: str | None = None, lang: str | None = None
) -> str:
    return ANALYSIS_PROMPT.format(
        hunk_count=hunk_count,
        pr_context=pr_context(pr_body),
        lang_suffix=lang_suffix(lang),
    )


def build_refine_prompt(group_id: str, group_title: str, lang: str | None = None) -> str:
    return REFINE_PROMPT.format(
        group_id=group_id, group_title=group_title, lang_suffix=lang_suffix(lang)
    )


def build_split_prompt(lang: str | None = None) -> str:
    return SPLIT_PROMPT.format(lang_suffix=lang_suffix(lang))
