"""Shared fixtures: APIC query results and a fake connection."""
import json

import pytest

from connection import QueryResult


def health_child(cur):
    return [{"healthInst": {"attributes": {"cur": cur}}}]


FABRIC_HEALTH = {
    "totalCount": "3",
    "imdata": [
        {"fabricHealthTotal": {"attributes": {"dn": "topology/health", "cur": "95"}}},
        {"fabricHealthTotal": {"attributes": {"dn": "topology/pod-1/health", "cur": "93"}}},
        {"fabricHealthTotal": {"attributes": {"dn": "topology/pod-2/health", "cur": "100"}}},
    ],
}

NODE_HEALTH = {
    "imdata": [
        {
            "topSystem": {
                "attributes": {
                    "role": "controller", "podId": "1", "state": "in-service",
                    "oobMgmtAddr": "10.0.0.1", "id": "1", "name": "apic1",
                },
                "children": health_child("0"),
            }
        },
        {
            "topSystem": {
                "attributes": {
                    "role": "leaf", "podId": "1", "state": "in-service",
                    "oobMgmtAddr": "10.0.0.101", "id": "101", "name": "leaf101",
                },
                "children": health_child("90"),
            }
        },
        {
            "topSystem": {
                "attributes": {
                    "role": "leaf", "podId": "2", "state": "in-service",
                    "oobMgmtAddr": "10.0.0.102", "id": "102", "name": "leaf102",
                },
                "children": health_child("75"),
            }
        },
    ],
}

TENANT_HEALTH = {
    "imdata": [
        {"fvTenant": {"attributes": {"name": "common"}, "children": health_child("100")}},
        {"fvTenant": {"attributes": {"name": "prod"}, "children": health_child("81")}},
    ],
}

FAULTS = {
    "imdata": [
        {
            "faultCountsWithDetails": {
                "attributes": {"crit": "2", "maj": "0", "minor": "1", "warn": "0"},
                "children": [
                    {
                        "faultTypeCounts": {
                            "attributes": {
                                "type": "X", "crit": "2", "maj": "0", "minor": "1", "warn": "0",
                                "critAcked": "1", "majAcked": "0", "minorAcked": "0",
                                "warnAcked": "0",
                            }
                        }
                    }
                ],
            }
        }
    ],
}

INFRA_NODE_HEALTH = {
    "imdata": [
        {
            "infraWiNode": {
                "attributes": {
                    "nodeName": "apic1", "addr": "10.0.0.1", "health": "fully-fit",
                    "apicMode": "active", "adminSt": "in-service", "operSt": "available",
                    "failoverStatus": "idle", "podId": "1",
                }
            }
        }
    ],
}

FABRIC_NAME = {
    "imdata": [{"infraCont": {"attributes": {"fbDmNm": "ACI Fabric1"}}}],
}

QUERY_RESULTS = {
    "fabric_health": FABRIC_HEALTH,
    "node_health": NODE_HEALTH,
    "tenant_health": TENANT_HEALTH,
    "faults": FAULTS,
    "infra_node_health": INFRA_NODE_HEALTH,
    "fabric_name": FABRIC_NAME,
}


class FakeConnection:
    """Connection double answering the logical queries from canned documents."""

    def __init__(self, results=None, login_ok=True, failing=()):
        self.results = dict(QUERY_RESULTS if results is None else results)
        self.login_ok = login_ok
        self.failing = set(failing)
        self.queries = []
        self.login_calls = 0
        self.logout_calls = 0

    def login(self):
        self.login_calls += 1
        return self.login_ok

    def logout(self):
        self.logout_calls += 1

    def get_by_query(self, name):
        self.queries.append(name)
        if name in self.failing or name not in self.results:
            return QueryResult(name, None, "query not supported")
        result = self.results[name]
        if not isinstance(result, str):
            result = json.dumps(result)
        return QueryResult(name, result, None)


class StubCollector:
    """Minimal stand in for AciMetricsCollector used by the domain collectors."""

    def __init__(self, documents=None):
        self.fabric = "test"
        self.documents = documents or {}

    def query(self, name):
        return self.documents.get(name)


@pytest.fixture
def connection():
    return FakeConnection()


@pytest.fixture
def stub_collector():
    return StubCollector(dict(QUERY_RESULTS))
