# tests/core/config/test_hashing.py
"""
Testes do hashing canônico de configuração.

Invariantes:
    - Mesma configuração → mesmo hash (independente da ordem das chaves)
    - O hash é SHA-256 do JSON canônico
    - Qualquer alteração de valor altera o hash
"""

import hashlib
import json

import pytest

from buildmods.core.config.hashing import compute_config_hash


def test_hash_is_deterministic(dummy_config):
    reordered = {k: dummy_config[k] for k in reversed(list(dummy_config))}
    h1 = compute_config_hash(dummy_config)
    h2 = compute_config_hash(reordered)
    assert h1 == h2
    assert isinstance(h1, str)
    assert len(h1) == 64


def test_hash_matches_sha256_of_canonical_json(dummy_config):
    canonical = json.dumps(dummy_config, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    expected = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    assert compute_config_hash(dummy_config) == expected


def test_hash_changes_on_override(dummy_config):
    changed = json.loads(json.dumps(dummy_config))
    changed["log"]["level"] = "DEBUG"
    assert compute_config_hash(dummy_config) != compute_config_hash(changed)


def test_hash_requires_dict():
    with pytest.raises(TypeError):
        compute_config_hash(["MODS"])
