#!/usr/bin/env python3
"""
Test: Configuration Loading
Settings are read only when asked for, never at import time
"""

import os
import subprocess
import sys

import pytest

from pssr.common.exceptions import InvalidArgument
from pssr.config import load_config
from pssr.crypto.emsa import PSSR, get_emsa

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
SETTINGS = ('PSS_HASH', 'PSS_SALT_SIZE', 'PSS_LOG_LEVEL', 'PSSR_DOTENV_MARKER')


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in SETTINGS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_defaults(clean_env):
    assert load_config() == {'hash': 'SHA-256', 'salt_size': None, 'log_level': 'WARNING'}


def test_reads_dotenv_in_working_directory(clean_env):
    (clean_env / ".env").write_text(
        "PSS_HASH=SHA-512\nPSS_SALT_SIZE=20\nPSSR_DOTENV_MARKER=loaded\n"
    )
    assert os.getenv('PSSR_DOTENV_MARKER') is None

    config = load_config()
    assert config['hash'] == 'SHA-512'
    assert config['salt_size'] == 20
    assert os.getenv('PSSR_DOTENV_MARKER') == 'loaded'

    emsa = get_emsa()
    assert isinstance(emsa, PSSR)
    assert emsa.name() == "EMSA4(SHA-512,MGF1,20)"


def test_empty_salt_size_means_default(clean_env, monkeypatch):
    monkeypatch.setenv('PSS_SALT_SIZE', '')
    assert load_config()['salt_size'] is None


@pytest.mark.parametrize("value", ["auto", "1.5", "-4"])
def test_bad_salt_size(clean_env, monkeypatch, value):
    monkeypatch.setenv('PSS_SALT_SIZE', value)
    with pytest.raises(InvalidArgument):
        load_config()
    with pytest.raises(InvalidArgument):
        get_emsa()

    # An explicit scheme does not consult the environment
    assert get_emsa("EMSA4(SHA-256)").name() == "EMSA4(SHA-256,MGF1,32)"


def test_import_leaves_environment_alone(tmp_path):
    (tmp_path / ".env").write_text("PSSR_DOTENV_MARKER=loaded\n")
    env = dict(os.environ, PYTHONPATH=ROOT, PSS_SALT_SIZE="auto")
    env.pop('PSSR_DOTENV_MARKER', None)

    result = subprocess.run(
        [sys.executable, "-c",
         "import os, pssr.crypto.emsa; print(os.getenv('PSSR_DOTENV_MARKER'))"],
        cwd=tmp_path, env=env, capture_output=True, text=True,
    )
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "None"
