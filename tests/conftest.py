import json

import pytest

from installplan import AbstractConfirm, BaseReporter, Tree
from installplan.lockfile import LOCKFILE_NAME


class TestReporter(BaseReporter):
    def __init__(self):
        self.events = []

    def starting(self, requirements):
        self.events.append(("starting", list(requirements)))

    def matching(self, requirement, matches):
        self.events.append(("matching", requirement, matches))

    def prompting(self, requirement, message):
        self.events.append(("prompting", requirement, message))

    def declining(self, requirement):
        self.events.append(("declining", requirement))

    def adding_spec(self, spec):
        self.events.append(("adding_spec", spec))

    def ending(self, plan):
        self.events.append(("ending", list(plan)))

    def names(self):
        return [event[0] for event in self.events]


class ScriptedConfirm(AbstractConfirm):
    """Answer prompts from a mapping of message to answer.

    Asking anything not in the script fails the test.
    """

    def __init__(self, answers=None):
        self.answers = dict(answers or {})
        self.asked = []

    def confirm(self, message, default):
        self.asked.append((message, default))
        try:
            return self.answers[message]
        except KeyError:
            pytest.fail(f"unexpected prompt {message!r}")


@pytest.fixture()
def reporter():
    return TestReporter()


@pytest.fixture()
def scripted_confirm():
    return ScriptedConfirm


@pytest.fixture()
def make_tree(tmp_path):
    def _make_tree(rocks=None, entrypoints=()):
        data = {
            "version": "1.0.0",
            "rocks": rocks or {},
            "entrypoints": list(entrypoints),
        }
        tmp_path.joinpath(LOCKFILE_NAME).write_text(json.dumps(data))
        return Tree(tmp_path)

    return _make_tree
