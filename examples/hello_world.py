"""
casbin_segment_adapter — Hello World

Rules live in an indexed segment store, one segment per rule, keyed by a
hash of the rule.  The enforcer loads them on start and writes every
change straight back through the adapter.
"""

import asyncio
import logging

import casbin
from casbin.model import Model

from casbin_segment_adapter import AdapterConfig, SegmentAdapter, StoreConfig, create_store

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


async def main():
    logging.basicConfig(level=logging.DEBUG)

    # ──────────────────────────────────────
    #  1. Open a store and bind the adapter
    # ──────────────────────────────────────
    store = create_store(StoreConfig(type="sqlite", path="hello_rules.db"))
    adapter = await SegmentAdapter.create(store, AdapterConfig(index_name="casbin_rule"))

    model = Model()
    model.load_model_from_text(RBAC_MODEL)
    enforcer = casbin.AsyncEnforcer(model, adapter)
    await enforcer.load_policy()

    # ──────────────────────────────────────
    #  2. Mutations go straight to the store
    # ──────────────────────────────────────
    await enforcer.add_policy("alice", "data1", "read")
    await enforcer.add_policy("data2_admin", "data2", "write")
    await enforcer.add_grouping_policy("bob", "data2_admin")

    print("alice read data1:", enforcer.enforce("alice", "data1", "read"))
    print("bob write data2: ", enforcer.enforce("bob", "data2", "write"))

    # ──────────────────────────────────────
    #  3. Filtered removal: every rule on data2
    # ──────────────────────────────────────
    await enforcer.remove_filtered_policy(1, "data2")
    print("bob write data2: ", enforcer.enforce("bob", "data2", "write"))

    await store.close()


if __name__ == "__main__":
    asyncio.run(main())
