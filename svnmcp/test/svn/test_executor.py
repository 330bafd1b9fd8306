"""Tests for svnmcp.svn.executor module.

Process-level tests run a fake ``svn`` script written into tmp_path.
"""

from __future__ import annotations

import json
import sys
import time
from pathlib import Path

import pytest

from svnmcp.core.config import SvnConfig
from svnmcp.core.errors import ErrorKind
from svnmcp.core.result import Err, Ok
from svnmcp.svn.executor import SvnExecutor, build_args, classify_failure


def _fake_svn(tmp_path: Path, body: str) -> str:
    """Write an executable Python script standing in for svn."""
    script = tmp_path / "svn"
    script.write_text(f"#!{sys.executable}\nimport sys, os, json, time\n{body}\n", encoding="utf-8")
    script.chmod(0o755)
    return str(script)


_ECHO_ARGS = "print(json.dumps({'argv': sys.argv[1:], 'cwd': os.getcwd()}))"


class TestBuildArgs:
    """Credentials and non-interactive flags."""

    def test_no_credentials_requested(self) -> None:
        config = SvnConfig(username="alice", password="s3cret")
        args = build_args("info", ["--xml", "."], config, use_credentials=False)
        assert args == ["info", "--xml", ".", "--non-interactive"]

    def test_credentials_attached(self) -> None:
        config = SvnConfig(username="alice", password="s3cret")
        args = build_args("log", ["--xml", "https://svn.example.com/repo"], config, use_credentials=True)
        assert args == [
            "log",
            "--xml",
            "https://svn.example.com/repo",
            "--username",
            "alice",
            "--password",
            "s3cret",
            "--non-interactive",
            "--no-auth-cache",
        ]

    @pytest.mark.parametrize(
        "config",
        [SvnConfig(), SvnConfig(username="alice"), SvnConfig(password="s3cret")],
    )
    def test_incomplete_credentials_omitted(self, config: SvnConfig) -> None:
        args = build_args("cat", ["a.c"], config, use_credentials=True)
        assert "--username" not in args
        assert "--password" not in args
        assert args.count("--non-interactive") == 1

    def test_non_interactive_never_duplicated(self) -> None:
        config = SvnConfig(username="alice", password="s3cret")
        args = build_args("info", ["--non-interactive"], config, use_credentials=True)
        assert args.count("--non-interactive") == 1
        assert args[args.index("--username") + 1] == "alice"
        assert "--no-auth-cache" in args


class TestClassifyFailure:
    @pytest.mark.parametrize(
        ("text", "kind"),
        [
            ("svn: E155007: '/tmp/x' is not a working copy", ErrorKind.NOT_WORKING_COPY),
            ("svn: E170001: authorization failed", ErrorKind.AUTH_FAILED),
            ("svn: E215004: Authentication failed and interactive prompting is disabled", ErrorKind.AUTH_FAILED),
            ("svn: E170013: Unable to connect to a repository at URL", ErrorKind.NETWORK_ERROR),
            ("svn: E000101: Network is unreachable", ErrorKind.NETWORK_ERROR),
            ("svn: E160013: '/repo/nope.c' path not found", ErrorKind.FILE_NOT_FOUND),
            ("svn: E200009: Could not cat all targets because some targets don't exist\nnon-existent", ErrorKind.FILE_NOT_FOUND),
            ("svn: E160006: No such revision 99999", ErrorKind.INVALID_REVISION),
            ("svn: E205000: Try 'svn help'", ErrorKind.COMMAND_FAILED),
        ],
    )
    def test_kinds(self, text: str, kind: ErrorKind) -> None:
        error = classify_failure(text, 1)
        assert error.kind is kind
        assert error.details == text
        assert error.returncode == 1

    def test_first_match_wins(self) -> None:
        text = "Unable to connect ... authorization failed"
        assert classify_failure(text, 1).kind is ErrorKind.AUTH_FAILED

    def test_generic_message_has_exit_code(self) -> None:
        error = classify_failure("boom", 2)
        assert error.message == "SVN command failed with exit code 2"


class TestExecute:
    """Run a fake svn binary."""

    @pytest.mark.asyncio
    async def test_passes_arguments(self, tmp_path: Path) -> None:
        binary = _fake_svn(tmp_path, _ECHO_ARGS)
        executor = SvnExecutor(SvnConfig(), binary=binary)

        result = await executor.execute("info", ["--xml", "."])

        assert isinstance(result, Ok)
        assert json.loads(result.value)["argv"] == ["info", "--xml", ".", "--non-interactive"]

    @pytest.mark.asyncio
    async def test_credentials_reach_the_process(self, tmp_path: Path) -> None:
        binary = _fake_svn(tmp_path, _ECHO_ARGS)
        config = SvnConfig(username="alice", password="s3cret")
        executor = SvnExecutor(config, binary=binary)

        result = await executor.execute("log", ["svn://svn.example.com/repo"], use_credentials=True)

        assert isinstance(result, Ok)
        argv = json.loads(result.value)["argv"]
        assert argv[argv.index("--username") + 1] == "alice"
        assert argv[argv.index("--password") + 1] == "s3cret"
        assert "--no-auth-cache" in argv

    @pytest.mark.asyncio
    async def test_runs_in_working_dir(self, tmp_path: Path) -> None:
        binary = _fake_svn(tmp_path, _ECHO_ARGS)
        wc = tmp_path / "wc"
        wc.mkdir()
        executor = SvnExecutor(SvnConfig(), binary=binary)

        result = await executor.execute("status", ["--xml"], working_dir=wc)

        assert isinstance(result, Ok)
        assert Path(json.loads(result.value)["cwd"]).resolve() == wc.resolve()

    @pytest.mark.asyncio
    async def test_stdout_verbatim(self, tmp_path: Path) -> None:
        binary = _fake_svn(tmp_path, "sys.stdout.write('  line 1\\r\\n\\nline 3  ')")
        executor = SvnExecutor(SvnConfig(), binary=binary)

        result = await executor.execute("cat", ["a.c"])

        assert result == Ok("  line 1\r\n\nline 3  ")

    @pytest.mark.asyncio
    async def test_empty_stdout_is_ok(self, tmp_path: Path) -> None:
        binary = _fake_svn(tmp_path, "pass")
        executor = SvnExecutor(SvnConfig(), binary=binary)

        assert await executor.execute("diff") == Ok("")

    @pytest.mark.asyncio
    async def test_failure_is_classified(self, tmp_path: Path) -> None:
        binary = _fake_svn(
            tmp_path,
            "sys.stderr.write(\"svn: E155007: '/tmp/x' is not a working copy\\n\"); sys.exit(1)",
        )
        executor = SvnExecutor(SvnConfig(), binary=binary)

        result = await executor.execute("status", ["/tmp/x"])

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.NOT_WORKING_COPY
        assert "E155007" in (result.error.details or "")
        assert result.error.returncode == 1

    @pytest.mark.asyncio
    async def test_stdout_also_classified(self, tmp_path: Path) -> None:
        binary = _fake_svn(tmp_path, "print('No such revision 42'); sys.exit(1)")
        executor = SvnExecutor(SvnConfig(), binary=binary)

        result = await executor.execute("log", ["-r", "42"])

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.INVALID_REVISION

    @pytest.mark.asyncio
    async def test_not_installed(self, tmp_path: Path) -> None:
        executor = SvnExecutor(SvnConfig(), binary=str(tmp_path / "no-such-svn"))

        result = await executor.execute("info")

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.NOT_INSTALLED
        assert result.error.code == "SVN_NOT_INSTALLED"

    @pytest.mark.asyncio
    async def test_timeout(self, tmp_path: Path) -> None:
        binary = _fake_svn(tmp_path, "time.sleep(30)")
        config = SvnConfig(username="alice", password="s3cret")
        executor = SvnExecutor(config, binary=binary)

        started = time.monotonic()
        result = await executor.execute("log", [], use_credentials=True, timeout_ms=300)
        elapsed = time.monotonic() - started

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.TIMEOUT
        assert result.error.message == "SVN command timed out after 300ms"
        assert (result.error.details or "").startswith("Command: ")
        assert "s3cret" not in (result.error.details or "")
        assert elapsed < 10

    @pytest.mark.asyncio
    async def test_default_timeout_from_config(self, tmp_path: Path) -> None:
        binary = _fake_svn(tmp_path, "time.sleep(30)")
        executor = SvnExecutor(SvnConfig(timeout_ms=200), binary=binary)

        result = await executor.execute("info")

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.TIMEOUT


class TestProbe:
    @pytest.mark.asyncio
    async def test_version(self, tmp_path: Path) -> None:
        binary = _fake_svn(tmp_path, "print('1.14.3 (r1914484)')")
        executor = SvnExecutor(SvnConfig(), binary=binary)

        assert await executor.version() == Ok("1.14.3 (r1914484)")
        assert await executor.is_installed() is True

    @pytest.mark.asyncio
    async def test_not_installed(self, tmp_path: Path) -> None:
        executor = SvnExecutor(SvnConfig(), binary=str(tmp_path / "no-such-svn"))
        assert await executor.is_installed() is False
