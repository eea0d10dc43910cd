import asyncio
import logging
import typing

from kubernetes_asyncio import client, config

from .exceptions import ConfigurationFault

logger = logging.getLogger(__name__)

# Global lock to prevent race conditions during config loading
_CONFIG_LOCK = asyncio.Lock()
_CONFIG_LOADED = False


async def ensure_k8s_config(kubeconfig: typing.Optional[str] = None) -> None:
    """
    Ensures that the Kubernetes configuration is loaded exactly once.

    In-cluster configuration is tried first, then the kubeconfig file given
    by ``kubeconfig`` (or the client's default lookup, which honours the
    KUBECONFIG environment variable).

    Raises:
        ConfigurationFault: If neither configuration source can be loaded.
    """
    global _CONFIG_LOADED

    if _CONFIG_LOADED:
        return

    async with _CONFIG_LOCK:
        # Double-check locking pattern
        if _CONFIG_LOADED:
            return

        try:
            logger.debug("Attempting to load in-cluster Kubernetes config...")
            config.load_incluster_config()
            logger.info("Loaded in-cluster Kubernetes configuration.")
            _CONFIG_LOADED = True
            return
        except config.ConfigException:
            logger.debug("In-cluster config not found.")

        try:
            logger.debug("Attempting to load kubeconfig %s...", kubeconfig or "(default location)")
            await config.load_kube_config(config_file=kubeconfig)
            logger.info("Loaded Kubernetes configuration from kubeconfig file.")
            _CONFIG_LOADED = True
            return
        except (config.ConfigException, OSError) as e:
            raise ConfigurationFault(
                f"Could not load Kubernetes configuration (in-cluster or kubeconfig '{kubeconfig or 'default'}'): {e}"
            ) from e


async def get_api_client(kubeconfig: typing.Optional[str] = None) -> client.ApiClient:
    """
    Returns a configured ApiClient shared by the typed API wrappers.
    Safe to call concurrently.
    """
    await ensure_k8s_config(kubeconfig)
    return client.ApiClient()
