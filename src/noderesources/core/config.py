# src/noderesources/core/config.py

import os

from dotenv import load_dotenv

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)

NODE_TYPE_CHOICES = ("all", "worker", "master", "infra")


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- Node selection defaults ---
    CLI_NODE_TYPE = os.getenv("CLI_NODE_TYPE", "worker").lower()
    SERVER_NODE_TYPE = os.getenv("SERVER_NODE_TYPE", "all").lower()

    # --- API variables ---
    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("API_PORT", "8080"))
    EXPORT_FILENAME = os.getenv("EXPORT_FILENAME", "cluster_metrics.xlsx")

    # --- Aggregation variables ---
    # 0 means one concurrent task per selected node, without a cap.
    MAX_CONCURRENT_NODES = int(os.getenv("MAX_CONCURRENT_NODES", "0"))

    # KUBECONFIG and K8S_REQUEST_TIMEOUT are resolved at access time so that a
    # kubeconfig exported after import (or set by the CLI) is honoured.
    @property
    def KUBECONFIG(self) -> str | None:
        return os.getenv("KUBECONFIG") or None

    @property
    def K8S_REQUEST_TIMEOUT(self) -> float:
        return float(os.getenv("K8S_REQUEST_TIMEOUT", "30"))

    def validate_instance(self):
        if self.CLI_NODE_TYPE not in NODE_TYPE_CHOICES:
            raise ValueError(f"CLI_NODE_TYPE must be one of {', '.join(NODE_TYPE_CHOICES)}")
        if self.SERVER_NODE_TYPE not in NODE_TYPE_CHOICES:
            raise ValueError(f"SERVER_NODE_TYPE must be one of {', '.join(NODE_TYPE_CHOICES)}")
        if self.MAX_CONCURRENT_NODES < 0:
            raise ValueError("MAX_CONCURRENT_NODES must be 0 (unbounded) or a positive integer.")
        if self.K8S_REQUEST_TIMEOUT < 0:
            raise ValueError("K8S_REQUEST_TIMEOUT must not be negative.")
        if not 0 < self.API_PORT < 65536:
            raise ValueError("API_PORT must be a valid TCP port.")


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
