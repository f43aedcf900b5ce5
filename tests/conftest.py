import pytest


class Tracked(object):
    """
    Re-iterable source which records how often it was opened and every element handed out.
    """

    def __init__(self, items):
        self.items = list(items)
        self.opened = 0
        self.pulled = []

    def __iter__(self):
        self.opened += 1
        return self._generate()

    def _generate(self):
        for item in self.items:
            self.pulled.append(item)
            yield item


@pytest.fixture
def tracked():
    return Tracked
