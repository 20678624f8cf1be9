"""Tests for the contextsync.cli.pull module."""

from pathlib import Path

import requests
from click.testing import CliRunner

from contextsync.cli import cli
from contextsync.config import Config, ConfigStore


def _init(config_dir: Path) -> None:
    ConfigStore(config_dir).save(Config(github_token="ghp_abc"))


def _invoke(config_dir: Path, *args: str):
    runner = CliRunner()
    return runner.invoke(cli, ["--config-dir", str(config_dir), *args])


class TestPull:
    """ctx pull mirrors the remote gist locally."""

    def test_not_initialized(self, patched_gist, in_repo, config_dir: Path, repo_dir: Path):
        result = _invoke(config_dir, "pull", "-d", str(repo_dir))
        assert result.exit_code == 1
        assert "Run 'ctx init <token>' first" in result.output

    def test_not_a_repository(self, patched_gist, not_in_repo, config_dir: Path, repo_dir: Path):
        _init(config_dir)
        result = _invoke(config_dir, "pull", "-d", str(repo_dir))
        assert result.exit_code == 1
        assert "Not a git repository" in result.output

    def test_nothing_to_pull(self, patched_gist, in_repo, config_dir: Path, repo_dir: Path):
        _init(config_dir)
        result = _invoke(config_dir, "pull", "-d", str(repo_dir))
        assert result.exit_code == 0
        assert "No context found for this repository" in result.output
        assert not (repo_dir / ".ai-context").exists()

    def test_push_then_pull_elsewhere(
        self, patched_gist, in_repo, config_dir: Path, tmp_path: Path
    ):
        _init(config_dir)
        source = tmp_path / "machine-a"
        (source / ".ai-context" / "sub").mkdir(parents=True)
        (source / ".ai-context" / "a.md").write_text("hello")
        (source / ".ai-context" / "sub" / "b.txt").write_text("world")
        assert _invoke(config_dir, "push", "-d", str(source)).exit_code == 0

        dest = tmp_path / "machine-b"
        dest.mkdir()
        result = _invoke(config_dir, "pull", "-d", str(dest))

        assert result.exit_code == 0, result.output
        assert "Pulled 2 file(s) to .ai-context/" in result.output
        ctx = dest / ".ai-context"
        files = sorted(p.relative_to(ctx).as_posix() for p in ctx.rglob("*") if p.is_file())
        assert files == ["a.md", "sub/b.txt"]
        assert (ctx / "a.md").read_text() == "hello"
        assert (ctx / "sub" / "b.txt").read_text() == "world"

    def test_network_failure(
        self, patched_gist, in_repo, config_dir: Path, repo_dir: Path, monkeypatch
    ):
        _init(config_dir)

        def offline(*_args, **_kwargs):
            raise requests.ConnectionError("offline")

        monkeypatch.setattr(patched_gist, "create", offline)
        result = _invoke(config_dir, "pull", "-d", str(repo_dir))

        assert result.exit_code == 1
        assert "pull failed: offline" in result.output

    def test_conflicting_names_keep_local_files(
        self, patched_gist, in_repo, config_dir: Path, repo_dir: Path
    ):
        _init(config_dir)
        ctx = repo_dir / ".ai-context"
        ctx.mkdir()
        (ctx / "precious.md").write_text("local work")
        assert _invoke(config_dir, "push", "-d", str(repo_dir)).exit_code == 0
        project_id = next(k for k, g in patched_gist.gists.items() if "precious.md" in g)
        patched_gist.gists[project_id] = {"a.md": "x", "a.md__b.md": "y"}

        result = _invoke(config_dir, "pull", "-d", str(repo_dir))

        assert result.exit_code == 1
        assert "needs it as a directory" in result.output
        assert [p.name for p in ctx.iterdir()] == ["precious.md"]
        assert (ctx / "precious.md").read_text() == "local work"
