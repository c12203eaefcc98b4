# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Core modules for SkillHub.

- skills: loading, indexing and trigger matching of skill documents
- exceptions: standardized exception hierarchy
- error_handlers: FastAPI handlers turning exceptions into JSON responses
"""
