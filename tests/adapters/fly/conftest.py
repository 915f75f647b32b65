"""Shared payloads for Machines API adapter tests."""

from __future__ import annotations

import pytest


@pytest.fixture
def machine_payload() -> dict[str, object]:
    return {
        "id": "148e21ea7d5089",
        "name": "worker-1",
        "state": "started",
        "region": "ams",
        "instance_id": "01HZ",
        "private_ip": "fdaa:0:1::3",
        "created_at": "2024-05-01T10:00:00Z",
        "updated_at": "2024-05-01T10:05:00Z",
        "host_status": "ok",
        "config": {
            "image": "registry.fly.io/my-app:latest",
            "guest": {"cpu_kind": "shared", "cpus": 1, "memory_mb": 256},
            "env": {"MODE": "worker"},
            "restart": {"policy": "on-failure", "max_retries": 3},
            "services": [
                {
                    "internal_port": 8080,
                    "protocol": "tcp",
                    "ports": [{"port": 443, "handlers": ["tls", "http"]}],
                }
            ],
            "metadata": {"fly_platform_version": "v2"},
        },
    }


@pytest.fixture
def volume_payload() -> dict[str, object]:
    return {
        "id": "vol_4y2n3k9x1",
        "name": "data",
        "state": "created",
        "size_gb": 3,
        "region": "ams",
        "zone": "a1b2",
        "encrypted": True,
        "attached_machine_id": None,
        "created_at": "2024-05-01T10:00:00Z",
        "fstype": "ext4",
        "snapshot_retention": 5,
        "auto_backup_enabled": True,
        "host_status": "ok",
        "block_size": 4096,
    }
