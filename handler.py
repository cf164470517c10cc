"""
This module contains the handler classes for the Falcon web server.
"""

import logging
import traceback
import falcon

from prometheus_client.exposition import CONTENT_TYPE_LATEST
from prometheus_client.exposition import generate_latest

from collector import AciMetricsCollector
from connection import connection_from_config

# pylint: disable=no-member

class WelcomePage:
    """
    Create the Welcome page for the API.
    """

    def on_get(self, req, resp):
        """
        Define the GET method for the API.
        """

        resp.status = falcon.HTTP_200
        resp.content_type = 'text/html'
        resp.text = """
        <h1>ACI Exporter</h1>
        <h2>Prometheus Exporter for Cisco ACI fabric monitoring</h2>
        <ul>
            <li><strong>Fabric Metrics:</strong> Use <code>/metrics?target=&lt;fabric&gt;</code> to retrieve fabric, pod, node and tenant health scores, fault counters and APIC inventory.</li>
            <li><strong>Liveness:</strong> Use <code>/health</code> to check that the exporter is running.</li>
        </ul>
        """

class HealthPage:
    """
    Liveness endpoint of the exporter itself.
    """

    def on_get(self, req, resp):
        """
        Define the GET method for the API.
        """
        resp.status = falcon.HTTP_200
        resp.content_type = 'text/plain'
        resp.text = "OK"

class MetricsHandler:
    """
    Metrics Handler for the Falcon API.
    """

    def __init__(self, config):
        self._config = config

    def on_get(self, req, resp):
        """
        Define the GET method for the API.
        """
        target = req.get_param("target")
        if not target:
            logging.error("No target parameter provided!")
            raise falcon.HTTPMissingParam("target")

        logging.debug("Received Target %s", target)

        if not (self._config.get("fabrics") or {}).get(target):
            msg = f"Target parameter provided not found in config: {target}"
            logging.error(msg)
            raise falcon.HTTPInvalidParam(msg, "target")

        with connection_from_config(self._config, target) as connection:

            if not connection.apics:
                msg = f"Target {target}: no apic url found in config file"
                logging.error(msg)
                raise falcon.HTTPInvalidParam(msg, "target")

            if not connection.has_credentials():
                msg = (
                    f"Target {target}: "
                    "no user/password found in environment and config file"
                )
                logging.error(msg)
                raise falcon.HTTPInvalidParam(msg, "target")

            registry = AciMetricsCollector(
                connection,
                fabric = target,
                prefix = self._config.get("prefix", "aci_"),
            )

            try:
                # collect the actual metrics
                resp.data = generate_latest(registry)
                resp.set_header("Content-Type", CONTENT_TYPE_LATEST)
                resp.status = falcon.HTTP_200

            except Exception:
                message = f"Exception: {traceback.format_exc()}"
                logging.error("Target %s: %s", target, message)
                raise falcon.HTTPBadRequest(description=message)
