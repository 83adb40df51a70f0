"""
The `scaffolding` sub-package manages the ejectable core files: the client
bootstrap and page shell that ship with sitewright and that a project may
take over by keeping its own copy under `layouts/ejected/`.
"""
