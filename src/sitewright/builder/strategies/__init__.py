"""
Build strategies. Exactly one runs per build:

- `native`: layouts and content are rendered in-process with Jinja2.
- `external`: build scripts are rendered and handed to the system's Node.js.
"""
