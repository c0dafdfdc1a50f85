import platform
from dataclasses import asdict

from fpcli.manifest import Manifest


def test_from_env_reads_build_details(monkeypatch):
    monkeypatch.setenv("FP_BUILD_VERSION", "9.9.9")
    monkeypatch.setenv("FP_COMMIT_BRANCH", "main")
    manifest = Manifest.from_env()
    assert manifest.build_version == "9.9.9"
    assert manifest.commit_branch == "main"


def test_from_env_defaults_missing_values(monkeypatch):
    monkeypatch.delenv("FP_COMMIT_SHA", raising=False)
    assert Manifest.from_env().commit_sha == "unknown"


def test_from_env_reports_interpreter():
    assert Manifest.from_env().python_version == platform.python_version()


def test_key_values_follow_fields(monkeypatch):
    monkeypatch.setenv("FP_BUILD_TIMESTAMP", "2022-07-11T10:56:04Z")
    manifest = Manifest.from_env()
    rows = manifest.key_values()
    assert [row.value for row in rows] == list(asdict(manifest).values())
    assert rows[0].key == "Build Timestamp:"
    assert rows[1].key == "Build Version:"
    assert rows[0].value == "2022-07-11T10:56:04Z"