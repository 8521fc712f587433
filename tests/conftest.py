"""
Pytest configuration for invokerpc tests.
"""
import sys
import os

import pytest

# Make `import invokerpc` work without installing the package
_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
_SRC_DIR = os.path.join(_ROOT, 'src')

if _SRC_DIR not in sys.path:
	sys.path.insert(0, _SRC_DIR)

# P-256 generator point, compressed
GENERATOR_HEX = "036b17d1f2e12c4247f8bce6e563a440f277037d812deb33a0f4a13945d898c296"
PRIVATE_KEY_HEX = "c7134d6fd8e73d819e82755c64c93788d8db0961929e025a53363c4cc02a6962"
CONTRACT_HASH = "0x" + "1f" * 20


@pytest.fixture
def private_key_hex():
	return PRIVATE_KEY_HEX


@pytest.fixture
def generator_hex():
	return GENERATOR_HEX


@pytest.fixture
def contract_hash():
	return CONTRACT_HASH
