class BaseReporter(object):
    """Delegate class to provide progress reporting for the resolver."""

    def starting(self, requirements):
        """Called before the first requirement is looked at."""

    def matching(self, requirement, matches):
        """Called after the tree has been queried for a requirement.

        ``matches`` is the ``NotFound``, ``Single`` or ``Many`` result.
        """

    def prompting(self, requirement, message):
        """Called before the user is asked whether to overwrite."""

    def declining(self, requirement):
        """Called when the user declines to overwrite a requirement.

        The requirement will not be in the plan.
        """

    def adding_spec(self, spec):
        """Called before an install specification is added to the plan."""

    def ending(self, plan):
        """Called after all requirements are resolved."""
