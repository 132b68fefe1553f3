"""
The APP layer: Qt signal wrappers that let any front-end observe a session
and drive its tick from the Qt event loop.
"""
