"""Version derivation and release materialization.

- tags: version tags per commit
- walker: commit walk and bump severity
- composer: next version text
- version_files: rewriting versions in files
- materialize / service: release commit and tag
"""

from __future__ import annotations
