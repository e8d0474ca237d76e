#!/usr/bin/env python3
"""Stand-in for the hive sensor node: posts simulated readings to a running server."""

import argparse
import random
import time

import httpx

API_URL = "http://127.0.0.1:8080/data"


def generate_sample_payload() -> dict:
    """A plausible reading; now and then a value drifts out of range."""
    temperature = random.choice(
        [
            round(random.uniform(33.5, 35.5), 1),  # Normal
            round(random.uniform(33.5, 35.5), 1),
            round(random.uniform(33.5, 35.5), 1),
            round(random.uniform(36.2, 37.5), 1),  # Warning zone
            round(random.uniform(38.5, 40.0), 1),  # Critical
        ]
    )
    return {
        "weight": round(random.uniform(30000, 34000), 2),
        "temperature": temperature,
        "humidity": round(random.uniform(55, 80), 1),
        "audio": random.randint(600, 2400),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--url", default=API_URL)
    parser.add_argument("--count", type=int, default=10)
    parser.add_argument("--interval", type=float, default=5.0, help="Seconds between posts")
    args = parser.parse_args()

    with httpx.Client(timeout=10.0) as client:
        for i in range(args.count):
            payload = generate_sample_payload()
            try:
                response = client.post(args.url, json=payload)
                print(f"[{i + 1}/{args.count}] {response.status_code} {payload}")
            except httpx.HTTPError as e:
                print(f"[{i + 1}/{args.count}] request failed: {e}")
            if i + 1 < args.count:
                time.sleep(args.interval)


if __name__ == "__main__":
    main()
