"""
Application package.

``core`` holds configuration, logging, errors and the subject registry,
``storage`` the two persistence backends, ``services`` the link service
and ``api`` the versioned routers.  ``main.create_app`` wires them
together; import ``subject_links_api.app.main:app`` to serve it.
"""
