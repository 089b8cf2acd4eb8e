# SPDX-License-Identifier: Apache-2.0
from schemasuite.cli import main

raise SystemExit(main())
