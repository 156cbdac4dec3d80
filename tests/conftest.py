"""Shared test fixtures."""

import pytest
from casbin.model import Model
from casbin.persist import load_policy_line

from casbin_segment_adapter import SegmentAdapter
from casbin_segment_adapter.stores import InMemorySegmentStore

RBAC_MODEL = """
[request_definition]
r = sub, obj, act

[policy_definition]
p = sub, obj, act

[role_definition]
g = _, _

[policy_effect]
e = some(where (p.eft == allow))

[matchers]
m = g(r.sub, p.sub) && r.obj == p.obj && r.act == p.act
"""

RBAC_POLICY = [
    "p, alice, data1, read",
    "p, bob, data2, write",
    "p, data2_admin, data2, read",
    "p, data2_admin, data2, write",
    "g, alice, data2_admin",
]


def new_model(lines=()):
    model = Model()
    model.load_model_from_text(RBAC_MODEL)
    for line in lines:
        load_policy_line(line, model)
    return model


def all_rules(model):
    return sorted(
        [("p", *rule) for rule in model.get_policy("p", "p")]
        + [("g", *rule) for rule in model.get_policy("g", "g")]
    )


@pytest.fixture
def store():
    return InMemorySegmentStore()


@pytest.fixture
def adapter(store):
    return SegmentAdapter(store)


@pytest.fixture
def rbac_model():
    return new_model(RBAC_POLICY)


@pytest.fixture
def empty_model():
    return new_model()


@pytest.fixture
def rules_of():
    return all_rules
