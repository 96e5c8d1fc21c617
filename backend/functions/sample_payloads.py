#!/usr/bin/env python3
# Boom Deployment Planner - Sample Payloads for the Report Function
# SPDX-License-Identifier: Apache-2.0

"""
Sample calculator payloads for the report function.

These represent typical river deployments and can be used for:
1. Integration testing
2. CLI demos (`boom-report prompt <name>`)
3. Documentation examples

Run: python sample_payloads.py --curl
"""

import json

# =============================================================================
# Sample Payloads - River Deployment Scenarios
# =============================================================================

SAMPLE_PAYLOADS = {
    # -------------------------------------------------------------------------
    # Scenario 1: Fast current, cascade system
    # -------------------------------------------------------------------------
    "cascade_fast_current": {
        "description": "2.5 kt current across a 300 ft channel; two cascade segments",
        "request": {
            "current": "2.5",
            "angle": "30",
            "riverWidth": "300",
            "riverMile": "45",
            "calculatedBoomLength": "350",
            "tension": "1200",
            "interval": "150+",
            "driftTime": "40",
            "isCascade": True,
            "segments": "2",
            "anchors": "5",
            "anchorDetailsText": "Anchor every 150 ft or less along each segment; double anchors at the leading end.",
        },
    },

    # -------------------------------------------------------------------------
    # Scenario 2: Slow current, single boom
    # -------------------------------------------------------------------------
    "single_boom_slack_water": {
        "description": "0.6 kt current near a marina; one continuous boom",
        "request": {
            "current": "0.6",
            "angle": "60",
            "riverWidth": "180",
            "riverMile": "12.4",
            "calculatedBoomLength": "210",
            "tension": "95",
            "interval": "200+",
            "driftTime": "",
            "isCascade": False,
            "segments": "1",
            "anchors": "2",
            "anchorDetailsText": "Anchor at each shoreline end.",
        },
    },

    # -------------------------------------------------------------------------
    # Scenario 3: Interval phrased as a rate
    # -------------------------------------------------------------------------
    "dense_anchoring": {
        "description": "Swift tailwater below a dam; interval given as a rate",
        "request": {
            "current": 3.2,
            "angle": 20,
            "riverWidth": 450,
            "riverMile": "471.0",
            "calculatedBoomLength": 1320,
            "tension": 4100,
            "interval": "1 per 100 ft",
            "driftTime": 18.5,
            "isCascade": True,
            "segments": 4,
            "anchors": 14,
            "anchorDetailsText": "One anchor per 100 ft of boom plus end anchors for each segment.",
        },
    },
}


def get_sample(name: str) -> dict:
    """Request body of a named sample payload."""
    if name not in SAMPLE_PAYLOADS:
        raise KeyError(f"Unknown sample payload: {name}")
    return dict(SAMPLE_PAYLOADS[name]["request"])


def generate_curl_examples(base_url: str = "http://localhost:8080"):
    """Print curl command examples for documentation"""

    print("# Boom Deployment Planner - Report API Examples")
    print("# =============================================")
    print()

    for name, payload in SAMPLE_PAYLOADS.items():
        print(f"# {name}: {payload['description']}")
        print(f"curl -X POST {base_url}/api/generate-report \\")
        print(f"  -H 'Content-Type: application/json' \\")
        print(f"  -d '{json.dumps(payload['request'])}'")
        print()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Sample payloads for the report function")
    parser.add_argument("--curl", action="store_true", help="Generate curl examples")
    parser.add_argument("--base-url", default="http://localhost:8080", help="API base URL")

    args = parser.parse_args()

    if args.curl:
        generate_curl_examples(args.base_url)
    else:
        print("Available sample payloads:")
        print("-" * 60)
        for name, payload in SAMPLE_PAYLOADS.items():
            print(f"  {name}")
            print(f"    {payload['description']}")
        print()
        print("Run with --curl for request examples")
