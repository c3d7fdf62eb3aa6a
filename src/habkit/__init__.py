#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""habkit renders the shell and PowerShell scripts that provision a Habitat supervisor."""

from provide.foundation.utils.versioning import get_version

__version__ = get_version("habkit", caller_file=__file__)

__all__ = [
    "__version__",
]

# 🔼⚙️🔚
