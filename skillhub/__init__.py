# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""SkillHub - a registry of markdown skill documents activated by keyword triggers."""

__version__ = "0.1.0"
