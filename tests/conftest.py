"""Pytest configuration and shared fixtures."""
import pytest
import tempfile
from pathlib import Path

import yaml

from roget.config import DEFAULT_CONFIG_PATH, config_from_dict, load_config


SAMPLE_ROGET = """\
<-- Project Gutenberg boilerplate
that goes on for a while
-->
%
CLASS I
WORDS EXPRESSING ABSTRACT RELATIONS
%
# Section one
     #1. Existence. -- N. existence, being, entity, ens[Lat], esse[Lat],
subsistence.
     reality, actuality; positiveness &c. adj.; fact, matter of fact.
     V. exist, be; have being.
     Adj. existing, existent, extant|; in existence.

     #2. Inexistence.-- N. inexistence; nonexistence.
     Adj. inexistent, nonexistent.

     #100a. [Less than one.] Fraction.-- N. fraction, fractional part; part &c. 51.
     Adj. fractional, partial.
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config():
    """The packaged default configuration."""
    return load_config()


@pytest.fixture
def config_data():
    """Raw YAML data of the default configuration, safe to modify."""
    with open(DEFAULT_CONFIG_PATH, encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def skip_orphans_config(config_data):
    """Configuration that drops text before the first header."""
    config_data["scanner"]["orphan_lines"] = "skip"
    return config_from_dict(config_data)


@pytest.fixture
def sample_lines():
    """Sample thesaurus text as a list of physical lines."""
    return SAMPLE_ROGET.splitlines(keepends=True)


@pytest.fixture
def sample_file(temp_dir):
    """Sample thesaurus text written to disk."""
    path = temp_dir / "roget-sample.txt"
    path.write_text(SAMPLE_ROGET, encoding="utf-8")
    return path
