# SPDX-License-Identifier: Apache-2.0
"""
schemasuite tests

Unit tests for the conformance driver (tests/unit) and the corpus entry
point that runs every JSON-Schema-Test-Suite and vendor block through the
configured engine (tests/suite).
"""
