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


"""
Coarse classification of changed files, used to annotate hunk listings.
"""

from typing import Literal

FileCategory = Literal["generated", "test", "docs", "config", "src"]

LOCK_FILES = {
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "cargo.lock",
    "go.sum",
    "poetry.lock",
    "composer.lock",
    "gemfile.lock",
}
GENERATED_SUFFIXES = (
    ".min.js",
    ".min.css",
    ".pb.go",
    ".pb.ts",
    ".g.dart",
    ".generated.ts",
    ".generated.js",
)
GENERATED_DIRS = ("/gen/", "/api/out/")

TEST_DIRS = ("__tests__", "__test__", "/test/", "/tests/", "/spec/", "/specs/")
TEST_SUFFIXES = (
    ".test.ts",
    ".test.tsx",
    ".test.js",
    ".test.jsx",
    ".spec.ts",
    ".spec.tsx",
    ".spec.js",
    ".spec.jsx",
    "_test.go",
    "_test.rs",
    "_test.py",
)

DOC_SUFFIXES = (".md", ".mdx", ".rst", ".txt")
DOC_DIRS = ("/docs/", "/doc/")
DOC_NAMES = {"changelog", "license", "licence"}

CONFIG_SUFFIXES = (
    ".toml",
    ".yaml",
    ".yml",
    ".json",
    ".ini",
    ".cfg",
    ".conf",
    ".config.js",
    ".config.ts",
    ".config.mjs",
)
CONFIG_NAMES = {"dockerfile", "makefile", "rakefile", "procfile"}
CONFIG_DIRS = ("/.github/", "/.circleci/", "/.vscode/")

RISK_STYLES = {"high": "bold red", "medium": "yellow", "low": "green"}


def _is_generated(path: str, base: str) -> bool:
    return (
        "generated" in path
        or any(d in path for d in GENERATED_DIRS)
        or path.startswith(("gen/", "api/out/"))
        or base in LOCK_FILES
        or path.endswith(GENERATED_SUFFIXES)
    )


def _is_test(path: str, base: str) -> bool:
    return (
        any(d in path for d in TEST_DIRS)
        or base.endswith(TEST_SUFFIXES)
        or base.startswith("test_")
    )


def _is_docs(path: str, base: str) -> bool:
    return (
        path.endswith(DOC_SUFFIXES)
        or any(d in path for d in DOC_DIRS)
        or base in DOC_NAMES
    )


def _is_config(path: str, base: str) -> bool:
    return (
        base.startswith(".")
        or base.endswith(CONFIG_SUFFIXES)
        or base in CONFIG_NAMES
        or any(d in path for d in CONFIG_DIRS)
    )


def classify_file(file_path: str) -> FileCategory:
    """Classify a path; the first matching rule wins, in the order below."""
    path = file_path.lower()
    base = path.rsplit("/", 1)[-1]

    if _is_generated(path, base):
        return "generated"
    if _is_test(path, base):
        return "test"
    if _is_docs(path, base):
        return "docs"
    if _is_config(path, base):
        return "config"
    return "src"


def file_extension(file_path: str) -> str:
    base = file_path.rsplit("/", 1)[-1]
    dot = base.rfind(".")
    if dot <= 0:
        return "(no ext)"
    return base[dot:]


def risk_style(risk: str) -> str:
    """Rich style for a group's risk level."""
    return RISK_STYLES.get(risk, "dim")
