from pathlib import Path

import pytest

from groth16.json_repr import dump_json
from groth16.tests import Vector, make_vector


@pytest.fixture(scope="session")
def vector() -> Vector:
    """A verifying (vk, proof, inputs) triple with two public inputs."""
    return make_vector(2)


@pytest.fixture(scope="session")
def vk(vector):
    return vector.vk


@pytest.fixture(scope="session")
def proof(vector):
    return vector.proof


@pytest.fixture(scope="session")
def inputs(vector):
    return list(vector.inputs)


@pytest.fixture
def vector_files(tmp_path: Path, vector: Vector):
    """The session vector written as vk.json / proof.json / inputs.json."""
    paths = {name: tmp_path / f"{name}.json" for name in ("vk", "proof", "inputs")}
    dump_json(paths["vk"], vector.vk)
    dump_json(paths["proof"], vector.proof)
    dump_json(paths["inputs"], vector.inputs)
    return paths


@pytest.fixture(autouse=True)
def _clean_groth16_env(monkeypatch):
    for name in ("GROTH16_BATCH_SIZE", "GROTH16_MAX_WORKERS", "GROTH16_EXECUTOR", "GROTH16_LOG_LEVEL", "GROTH16_LOG"):
        monkeypatch.delenv(name, raising=False)
