from __future__ import annotations

import os
from pathlib import Path

from taskapi import config


def test_project_root_is_repository_root() -> None:
    assert config.PROJECT_ROOT == Path(config.__file__).resolve().parents[1]


def test_env_overlay_overrides_base_file(tmp_path, monkeypatch) -> None:
    (tmp_path / ".env").write_text("TASKAPI_SAMPLE_BASE=base\nTASKAPI_SAMPLE_SHARED=base\n")
    (tmp_path / ".env.staging").write_text("TASKAPI_SAMPLE_SHARED=staging\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("APP_ENV", "staging")
    for name in ("TASKAPI_SAMPLE_BASE", "TASKAPI_SAMPLE_SHARED"):
        monkeypatch.delenv(name, raising=False)

    try:
        config.load_env()

        assert os.environ["TASKAPI_SAMPLE_BASE"] == "base"
        assert os.environ["TASKAPI_SAMPLE_SHARED"] == "staging"
    finally:
        os.environ.pop("TASKAPI_SAMPLE_BASE", None)
        os.environ.pop("TASKAPI_SAMPLE_SHARED", None)
