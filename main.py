"""
ACI Prometheus Exporter
"""
import argparse
import logging
import os
import warnings
import sys

from wsgiref.simple_server import make_server, WSGIServer, WSGIRequestHandler
from socketserver import ThreadingMixIn
import yaml

import falcon

from handler import HealthPage
from handler import MetricsHandler
from handler import WelcomePage

class _SilentHandler(WSGIRequestHandler):
    """WSGI handler that does not log requests."""

    def log_message(self, format, *args): # pylint: disable=redefined-builtin
        """Log nothing."""


class ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    """Thread per request HTTP server."""

def create_app(config):
    """
    Create the Falcon API with all routes
    """
    api = falcon.App()
    api.add_route("/metrics", MetricsHandler(config))
    api.add_route("/health", HealthPage())
    api.add_route("/", WelcomePage())
    return api

def falcon_app(config):
    """
    Start the Falcon API
    """
    port = int(os.getenv("LISTEN_PORT", config.get("listen_port", 9643)))
    addr = "0.0.0.0"
    logging.info("Starting ACI Prometheus Server ...")

    api = create_app(config)

    with make_server(addr, port, api, ThreadingWSGIServer, handler_class=_SilentHandler) as httpd:
        httpd.daemon = True # pylint: disable=attribute-defined-outside-init
        logging.info("Listening on Port %s", port)
        try:
            httpd.serve_forever()
        except (KeyboardInterrupt, SystemExit):
            logging.info("Stopping ACI Prometheus Server")

def enable_logging(filename, debug):
    """enable logging"""
    logger = logging.getLogger()

    formatter = logging.Formatter(
        '%(asctime)-15s %(process)d %(filename)24s:%(lineno)-3d %(levelname)-7s %(message)s'
    )

    if debug:
        logger.setLevel("DEBUG")
    else:
        logger.setLevel("INFO")

    sh = logging.StreamHandler()
    sh.setFormatter(formatter)
    logger.addHandler(sh)

    if filename:
        try:
            fh = logging.FileHandler(filename, mode='w')
        except FileNotFoundError as e:
            logging.error("Could not open logfile %s: %s", filename, e)
            sys.exit(1)

        fh.setFormatter(formatter)
        logger.addHandler(fh)

def load_config(filename):
    """
    Load the yaml config file
    """
    with open(filename, "r", encoding="utf8") as config_file:
        config = yaml.safe_load(config_file.read()) or {}

    if not config.get("fabrics"):
        logging.warning("No fabrics configured in %s", filename)

    return config

def get_args(argv=None):
    """
    Get the command line arguments
    """
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "-c",
        "--config",
        help="Specify config yaml file",
        metavar="FILE",
        required=False,
        default="config.yml"
    )
    parser.add_argument(
        "-l",
        "--logging",
        help="Log all messages to a file",
        metavar="FILE",
        required=False
    )
    parser.add_argument(
        "-d", "--debug",
        help="Debugging mode",
        action="store_true",
        required=False
    )

    return parser.parse_args(argv)


if __name__ == "__main__":

    call_args = get_args()

    warnings.filterwarnings("ignore")

    enable_logging(call_args.logging, call_args.debug)

    # get the config

    if call_args.config:
        try:
            configuration = load_config(call_args.config)
        except FileNotFoundError as err:
            print(f"Config File not found: {err}")
            sys.exit(1)

        falcon_app(configuration)
