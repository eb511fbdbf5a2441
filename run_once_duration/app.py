"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: MIT-0
"""
import logging
import os

from flask import Flask
from kubernetes import client, config

from .admission import RunOnceDuration
from .config import policy_from_settings, settings
from .namespaces import KubernetesNamespaceCache
from .routes import create_routes
from .store.redis_store import RedisStore

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(message)s",
)
log = logging.getLogger("run-once-duration")

# Initialize Kubernetes client; avoid constructing real client in tests
if os.getenv("APP_ENV", getattr(settings, "app_env", "production")) == "test":
    core = object()
else:
    config.load_incluster_config()
    core = client.CoreV1Api()

app = Flask(__name__)
datastore = None
if not settings.redis_url:
    log.info("REDIS_URL not set; namespace lookups go straight to the API server")
else:
    datastore = RedisStore(
        settings.redis_url,
        settings.namespace_cache_ttl_seconds,
        socket_timeout_seconds=settings.cache_timeout_seconds,
    )

namespace_cache = KubernetesNamespaceCache(
    core,
    datastore,
    ttl_seconds=settings.namespace_cache_ttl_seconds,
    timeout_seconds=settings.webhook_timeout_seconds,
)
policy = policy_from_settings(settings)
plugin = RunOnceDuration(policy, namespace_cache, settings.override_annotation)
plugin.validate()

if policy is None:
    log.info("RunOnceDuration disabled by config; all pods are admitted unchanged")
else:
    log.info(
        "RunOnceDuration enabled (default activeDeadlineSeconds=%s, annotation=%s)",
        policy.default_active_deadline_seconds,
        settings.override_annotation,
    )

bp = create_routes(plugin)
app.register_blueprint(bp)

if __name__ == "__main__":
    log.info("Starting webhook server...")
    app.run(
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8443")),
        ssl_context=("tls/tls.crt", "tls/tls.key"),
    )
