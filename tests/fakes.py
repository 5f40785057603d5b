# tests/fakes.py
"""Stand-ins for the tag formatter and filesystem collaborators."""


class FakeHtml:
    """Formats tags as [type url] and records every call."""

    def __init__(self):
        self.calls = []

    def style(self, url, attributes):
        self.calls.append(("style", url, dict(attributes)))
        return f"[style {url}]"

    def script(self, url, attributes):
        self.calls.append(("script", url, dict(attributes)))
        return f"[script {url}]"


class FakeFiles:
    """Returns canned modification times; unknown paths give ''."""

    def __init__(self, times=None, error=None):
        self.times = times if times is not None else {}
        self.error = error
        self.calls = []

    def last_modified(self, path):
        self.calls.append(str(path))
        if self.error is not None:
            raise self.error
        return self.times.get(str(path), "")
