# Boom Deployment Planner - Cloud Functions
# SPDX-License-Identifier: Apache-2.0

"""
Serverless entry points for the boom deployment calculator.

These functions run on cloud infrastructure to:
1. Draft a deployment report from the calculator's outputs
2. File the inputs and report in the deployment database
3. Provide a REST API for the browser calculator
"""
