# SPDX-License-Identifier: Apache-2.0
"""Engine adapters shipped with the driver."""
