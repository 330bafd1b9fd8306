"""svn operations module.

This module provides the layers between a request and the svn binary:
- PathResolver: input path/URL -> RepositoryLocation
- SvnExecutor: runs svn, classifies failures
- parsers: svn output -> structured records
- SvnClient: read-only operations built on the three

Usage:
    from svnmcp.svn import SvnClient

    client = SvnClient(config)
    result = await client.info("https://svn.example.com/repo/branches/1.0")
    if result.is_ok():
        print(result.unwrap().branch_name)
"""

from svnmcp.svn.client import SvnClient
from svnmcp.svn.executor import SvnExecutor, classify_failure
from svnmcp.svn.models import (
    BlameLine,
    BranchInfo,
    BranchType,
    CommitSummary,
    InfoRecord,
    LogEntry,
    LogPathChange,
    Operation,
    RepositoryLocation,
    StatusEntry,
)
from svnmcp.svn.parsers import (
    classify_branch,
    parse_blame,
    parse_info_xml,
    parse_log_xml,
    parse_status_xml,
)
from svnmcp.svn.resolver import PathResolver, find_working_copy_root, is_url

__all__ = [
    # client
    "SvnClient",
    # executor
    "SvnExecutor",
    "classify_failure",
    # models
    "BlameLine",
    "BranchInfo",
    "BranchType",
    "CommitSummary",
    "InfoRecord",
    "LogEntry",
    "LogPathChange",
    "Operation",
    "RepositoryLocation",
    "StatusEntry",
    # parsers
    "classify_branch",
    "parse_blame",
    "parse_info_xml",
    "parse_log_xml",
    "parse_status_xml",
    # resolver
    "PathResolver",
    "find_working_copy_root",
    "is_url",
]
