#!/usr/bin/env python3
"""Benchmark the permission matrix: load and save latency (p50, p95, p99).

Usage:
  export API_URL=http://localhost:8000 KEYCLOAK_URL=http://localhost:8080
  export BENCH_USER=admin BENCH_PASSWORD=... BENCH_TARGET_USER=<uuid>
  python scripts/bench_matrix.py [--iterations 100]

The target user's direct grants are restored to their initial value at the end.
"""
from __future__ import annotations

import argparse
import os
import statistics
import sys
import time

import httpx


def get_token(
    keycloak_url: str,
    realm: str,
    client_id: str,
    client_secret: str,
    username: str,
    password: str,
) -> str:
    url = f"{keycloak_url.rstrip('/')}/realms/{realm}/protocol/openid-connect/token"
    r = httpx.post(
        url,
        data={
            "grant_type": "password",
            "client_id": client_id,
            "client_secret": client_secret,
            "username": username,
            "password": password,
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        timeout=30.0,
    )
    r.raise_for_status()
    return r.json()["access_token"]


def percentiles(latencies: list[float]) -> tuple[float, float, float]:
    n = len(latencies)
    ordered = sorted(latencies)
    p50 = statistics.median(latencies) * 1000
    p95 = ordered[int(n * 0.95) - 1] * 1000 if n >= 20 else p50
    p99 = ordered[int(n * 0.99) - 1] * 1000 if n >= 100 else p95
    return p50, p95, p99


def effective_names(matrix: dict) -> list[str]:
    return sorted(
        p["name"]
        for m in matrix["modules"]
        for p in m["permissions"]
        if p["state"] in ("inherited", "active")
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark permission matrix load/save")
    parser.add_argument("--iterations", type=int, default=50, help="Requests per operation")
    parser.add_argument("--output", type=str, default="/results/bench_matrix.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    keycloak_url = os.environ.get("KEYCLOAK_URL", "http://localhost:8080")
    realm = os.environ.get("KEYCLOAK_REALM", "permatrix")
    client_id = os.environ.get("KEYCLOAK_CLIENT_ID", "permatrix-api")
    client_secret = os.environ.get("KEYCLOAK_CLIENT_SECRET", "permatrix-api-secret")
    user = os.environ.get("BENCH_USER", "admin")
    password = os.environ.get("BENCH_PASSWORD", "admin")
    target = os.environ.get("BENCH_TARGET_USER")
    if not target:
        print("BENCH_TARGET_USER is required")
        return 2

    print("Getting token...")
    token = get_token(keycloak_url, realm, client_id, client_secret, user, password)
    headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}
    matrix_url = f"{api_url}/v1/users/{target}/permissions-matrix"
    save_url = f"{api_url}/v1/users/{target}/permissions"

    load_latencies: list[float] = []
    save_latencies: list[float] = []
    errors = 0
    with httpx.Client(timeout=30.0) as client:
        r = client.get(matrix_url, headers=headers)
        r.raise_for_status()
        initial = effective_names(r.json())

        print(f"Running {args.iterations} loads and saves...")
        for _ in range(args.iterations):
            t0 = time.perf_counter()
            r = client.get(matrix_url, headers=headers)
            elapsed = time.perf_counter() - t0
            if r.status_code != 200:
                errors += 1
                continue
            load_latencies.append(elapsed)

            t0 = time.perf_counter()
            r = client.put(save_url, json={"permissions": effective_names(r.json())}, headers=headers)
            elapsed = time.perf_counter() - t0
            if r.status_code == 200:
                save_latencies.append(elapsed)
            else:
                errors += 1

        client.put(save_url, json={"permissions": initial}, headers=headers).raise_for_status()

    if not load_latencies or not save_latencies:
        print("No successful requests.")
        return 1

    lines = [f"Permission matrix benchmark (iterations={args.iterations}, errors={errors})"]
    for label, latencies in (("load", load_latencies), ("save", save_latencies)):
        p50, p95, p99 = percentiles(latencies)
        lines.append(f"  {label}: p50={p50:.1f} ms, p95={p95:.1f} ms, p99={p99:.1f} ms")
    summary = "\n".join(lines) + "\n"
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError as e:
        print(f"Could not write {args.output}: {e}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
