"""Resolve profiling targets from the pods of Kubernetes deployments."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Sequence

from kubernetes import client, config as k8s_config
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError as TransportError

from ..core.errors import ResolutionError
from ..core.registry import ResolverRegistry
from ..core.resolver import TargetResolver
from ..core.types import RunConfig, Target, TargetGroup

logger = logging.getLogger(__name__)


def kubeconfig_path() -> Path:
    return Path.home() / ".kube" / "config"


def load_api_client(developer_mode: str) -> client.ApiClient:
    """Return an API client using local or in-cluster credentials.

    ``developer_mode == "true"`` reads ``~/.kube/config``; any other value
    uses the pod's service account.
    """
    configuration = client.Configuration()
    try:
        if developer_mode == "true":
            path = kubeconfig_path()
            logger.debug("Loading kubeconfig from %s", path)
            k8s_config.load_kube_config(
                config_file=str(path), client_configuration=configuration
            )
        else:
            k8s_config.load_incluster_config(client_configuration=configuration)
    except (k8s_config.ConfigException, OSError) as exc:
        raise ResolutionError(f"Unable to load Kubernetes credentials: {exc}") from exc
    return client.ApiClient(configuration)


def label_selector(labels: Mapping[str, str] | None) -> str:
    return ",".join(f"{key}={value}" for key, value in sorted((labels or {}).items()))


@ResolverRegistry.register("cluster")
class ClusterTargetResolver(TargetResolver):
    """One target group per deployment, one target per pod."""

    resolver_id = "cluster"
    resolver_name = "Kubernetes deployments"

    def __init__(
        self,
        config: RunConfig,
        *,
        apps_api: Any | None = None,
        core_api: Any | None = None,
    ) -> None:
        super().__init__(config)
        if not config.namespace:
            raise ResolutionError("The cluster resolver requires a namespace")
        self._namespace = config.namespace
        self._apps_api = apps_api
        self._core_api = core_api

    def resolve_groups(self) -> Sequence[TargetGroup]:
        if not self._config.targets:
            return []
        self._ensure_apis()
        return [self._resolve_deployment(name) for name in self._config.targets]

    def _ensure_apis(self) -> None:
        if self._apps_api is not None and self._core_api is not None:
            return
        api_client = load_api_client(self._config.developer_mode)
        if self._apps_api is None:
            self._apps_api = client.AppsV1Api(api_client)
        if self._core_api is None:
            self._core_api = client.CoreV1Api(api_client)

    def _resolve_deployment(self, deployment_name: str) -> TargetGroup:
        try:
            deployment = self._apps_api.read_namespaced_deployment(
                deployment_name, self._namespace
            )
        except ApiException as exc:
            raise ResolutionError(
                f"Unable to read deployment '{deployment_name}' in namespace "
                f"'{self._namespace}': {exc.status} {exc.reason}"
            ) from exc
        except TransportError as exc:
            raise ResolutionError(
                f"Unable to read deployment '{deployment_name}' in namespace "
                f"'{self._namespace}': {exc}"
            ) from exc

        selector = label_selector(deployment.metadata.labels)
        if not selector:
            raise ResolutionError(f"Deployment '{deployment_name}' has no labels to select pods by")

        try:
            pods = self._core_api.list_namespaced_pod(self._namespace, label_selector=selector)
        except ApiException as exc:
            raise ResolutionError(
                f"Unable to list pods for deployment '{deployment_name}' "
                f"({selector}): {exc.status} {exc.reason}"
            ) from exc
        except TransportError as exc:
            raise ResolutionError(
                f"Unable to list pods for deployment '{deployment_name}' "
                f"({selector}): {exc}"
            ) from exc

        targets: list[Target] = []
        for pod in pods.items:
            pod_name = pod.metadata.name
            pod_ip = getattr(pod.status, "pod_ip", None)
            if not pod_ip:
                logger.warning("Skipping pod %s of %s: no IP assigned", pod_name, deployment_name)
                continue
            targets.append(Target(name=pod_name, address=pod_ip))

        logger.debug("Deployment %s resolved to %d pod(s)", deployment_name, len(targets))
        return TargetGroup(label=deployment_name, targets=tuple(targets))


__all__ = ["ClusterTargetResolver", "kubeconfig_path", "label_selector", "load_api_client"]
