"""Authenticated connection to the REST API of an APIC cluster."""
import logging
import os
import time
from collections import namedtuple

import requests

DEFAULT_QUERIES = {
    "fabric_health": "/api/class/fabricHealthTotal.json",
    "node_health": "/api/class/topSystem.json?rsp-subtree-include=health,required",
    "tenant_health": "/api/class/fvTenant.json?rsp-subtree-include=health,required",
    "faults": "/api/class/faultCountsWithDetails.json?rsp-subtree=children",
    "infra_node_health": "/api/class/infraWiNode.json",
    "fabric_name": "/api/class/infraCont.json",
}

QueryResult = namedtuple("QueryResult", ["name", "data", "error"])


class AciConnection:
    """
    Session with one of the APICs of a fabric.

    The APIC hands out a session cookie on login which the requests session
    keeps for all later queries.
    """

    def __enter__(self):
        return self

    def __init__(self, fabric, apics, usr, pwd, timeout=10, verify=False, queries=None):
        self.fabric = fabric

        if isinstance(apics, str):
            apics = [apics]
        self.apics = [apic.rstrip("/") for apic in apics or []]

        self._username = usr
        self._password = pwd
        self._timeout = timeout
        self._verify = verify

        self.queries = dict(DEFAULT_QUERIES)
        self.queries.update({k: v for k, v in (queries or {}).items() if v})

        self._session = None
        self._apic = ""
        self._logged_in = False

    def _get_session(self):
        if not self._session:
            self._session = requests.Session()
            self._session.verify = self._verify
            self._session.headers.update({"content-type": "application/json"})
        return self._session

    def has_credentials(self):
        """Check that both user and password are set."""
        return bool(self._username and self._password)

    def login(self):
        """Log in to the first APIC that accepts the credentials."""
        logging.captureWarnings(True)
        session = self._get_session()
        payload = {"aaaUser": {"attributes": {"name": self._username, "pwd": self._password}}}

        for apic in self.apics:
            logging.info("Fabric %s: Connecting to APIC %s", self.fabric, apic)
            try:
                response = session.post(
                    f"{apic}/api/aaaLogin.json", json=payload, timeout=self._timeout
                )
                response.raise_for_status()

            except requests.exceptions.HTTPError as err:
                if err.response.status_code == 401:
                    logging.error(
                        "Fabric %s: Authorization Error: wrong user/password on APIC %s: %s",
                        self.fabric, apic, err
                    )
                else:
                    logging.error("Fabric %s: HTTP Error on APIC %s: %s", self.fabric, apic, err)
                continue

            except requests.exceptions.Timeout:
                logging.error("Fabric %s: Timeout while connecting to %s", self.fabric, apic)
                continue

            except requests.exceptions.ConnectionError as err:
                logging.error("Fabric %s: Unable to connect to %s: %s", self.fabric, apic, err)
                continue

            except requests.exceptions.RequestException as err:
                logging.error("Fabric %s: Unexpected error on %s: %s", self.fabric, apic, err)
                continue

            self._apic = apic
            self._logged_in = True
            logging.info("Fabric %s: Logged in to APIC %s", self.fabric, apic)
            return True

        logging.warning("Fabric %s: Login failed on all APICs!", self.fabric)
        return False

    def logout(self):
        """Log out from the APIC, does nothing if there is no active login."""
        if not self._logged_in:
            logging.debug("Fabric %s: No APIC session to log out from.", self.fabric)
            return

        self._logged_in = False
        payload = {"aaaUser": {"attributes": {"name": self._username}}}
        try:
            response = self._session.post(
                f"{self._apic}/api/aaaLogout.json", json=payload, timeout=self._timeout
            )
            response.raise_for_status()
            logging.debug("Fabric %s: Logged out from APIC %s", self.fabric, self._apic)

        except requests.exceptions.RequestException as err:
            logging.warning(
                "Fabric %s: Failed to log out from APIC %s: %s", self.fabric, self._apic, err
            )

    def get_by_query(self, name):
        """
        Run the logical query name against the APIC.

        Returns a QueryResult with the raw json text in data, or the reason of
        the failure in error.
        """
        if name not in self.queries:
            return QueryResult(name, None, "query not supported")

        if not self._logged_in:
            return QueryResult(name, None, "not logged in")

        url = f"{self._apic}{self.queries[name]}"
        logging.debug("Fabric %s: Using URL %s", self.fabric, url)
        request_start = time.time()

        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()

        except requests.exceptions.HTTPError as err:
            return QueryResult(name, None, f"HTTP Error {err.response.status_code}: {err}")

        except requests.exceptions.Timeout:
            return QueryResult(name, None, f"Timeout while reading data from {self._apic}")

        except requests.exceptions.RequestException as err:
            return QueryResult(name, None, f"Request failed: {err}")

        logging.debug(
            "Fabric %s: Query %s duration: %s",
            self.fabric, name, round(time.time() - request_start, 2)
        )
        return QueryResult(name, response.text, None)

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._session:
            logging.debug("Fabric %s: Closing requests session.", self.fabric)
            self._session.close()
            self._session = None


def connection_from_config(config, fabric):
    """Build the connection of a fabric, credentials from the environment win."""
    fabric_config = config["fabrics"][fabric]
    env_prefix = fabric.replace("-", "_").upper()

    return AciConnection(
        fabric,
        apics=fabric_config.get("apic", []),
        usr=os.getenv(f"{env_prefix}_USERNAME", fabric_config.get("username")),
        pwd=os.getenv(f"{env_prefix}_PASSWORD", fabric_config.get("password")),
        timeout=int(os.getenv("TIMEOUT", config.get("timeout", 10))),
        verify=config.get("verify_ssl", False),
        queries=config.get("queries"),
    )
