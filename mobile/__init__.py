"""
Station Finder client.

Python rendition of the mobile app: the screens hold the same state the
app does and talk to the REST API through :class:`mobile.api.ApiClient`.
"""
