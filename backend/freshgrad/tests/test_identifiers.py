from __future__ import annotations

import uuid

from freshgrad.utils.identifiers import generate_prefixed_id, generate_uuid7, id_factory


def test_uuid7_version_and_variant():
    value = uuid.UUID(generate_uuid7())

    assert value.version == 7
    assert value.variant == uuid.RFC_4122


def test_prefixed_ids_are_unique():
    ids = {generate_prefixed_id("C") for _ in range(500)}

    assert len(ids) == 500
    assert all(i.startswith("C-") for i in ids)


def test_id_factory_uses_prefix():
    assert id_factory("NTF")().startswith("NTF-")
