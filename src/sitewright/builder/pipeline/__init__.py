"""
The `pipeline` sub-package sequences a site build.

- `stages`: one function per step, each taking and returning a `BuildContext`.
- `orchestrator`: runs the stages in their fixed order and reports failures.
"""
