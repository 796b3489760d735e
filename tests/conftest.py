"""Pytest configuration and fixtures for attrspec tests."""

from pathlib import Path

import pytest
import yaml

from attrspec.normalizer import normalize


SAMPLE_DECLARATIONS = r"""
namelike:
  example: Seferidis
  invalid: Seferidis the 1st
  valid_values:
    - /\D*/
  require: no
digits_only:
  example: 123456
  invalid: 12g334
  valid_values:
    - /\d{6}/
  require: no
three_alpha_two_digits:
  example: abc44
  invalid: 12345
  valid_values:
    - /[a-zA-Z]{3}\d{2}/
  require: no
gmail email:
  example: manossef@gmail.com
  invalid: manossef@yahoo.com
  valid_values:
    - /.*@gmail\.com/
  require: no
"""

ANIMAL_DECLARATIONS = """
Favorite animals:
  programmatic_name: fav_animals
  valid_num_values: 1
  valid_values:
    - snake
    - hippo
    - squirel
    - other
"""


@pytest.fixture
def sample_declarations():
    """Raw declarations with an example and an invalid value per attribute."""
    return yaml.safe_load(SAMPLE_DECLARATIONS)


@pytest.fixture
def sample_rules(sample_declarations):
    """Rule set normalized from the sample declarations."""
    return normalize(sample_declarations)


@pytest.fixture
def animal_rules():
    """Rule set with one multi-valued choice attribute."""
    return normalize(yaml.safe_load(ANIMAL_DECLARATIONS))


@pytest.fixture
def declarations_file(tmp_path) -> Path:
    """Declaration document on disk, in YAML."""
    path = tmp_path / "declarations.yml"
    path.write_text(SAMPLE_DECLARATIONS + ANIMAL_DECLARATIONS, encoding="utf-8")
    return path
