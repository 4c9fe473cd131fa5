import pytest
from pathlib import Path


LOGIN_FEATURE = """\
Feature: Login

  Background:
    Given base

  @automated
  Scenario Outline: Use an account
    When I use <user>

    Examples:
      | user  |
      | alice |
      | bob   |

  @manual
  Scenario: Not selected
    When I do it by hand
"""


@pytest.fixture
def login_feature() -> str:
    """Background, one outline tagged @automated and one @manual scenario"""
    return LOGIN_FEATURE


@pytest.fixture
def features_dir(tmp_path) -> Path:
    """Empty input directory"""
    path = tmp_path / "features"
    path.mkdir()
    return path


@pytest.fixture
def write_feature(features_dir):
    """Write a feature file into the input directory"""
    def _write(name: str, content: str) -> Path:
        path = features_dir / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
