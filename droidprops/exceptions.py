"""
Exceptions raised while deriving scanner properties.

Only two situations abort a property computation:

- InvalidVariantError: the user named a variant the project does not have
- ModelAccessError: an accessor on the build model failed unexpectedly

Everything else (missing compiler task, missing boot classpath, unsupported
accessors) is logged as a warning and the computation carries on.
"""


class DroidPropsError(Exception):
    """Base exception for droidprops errors."""
    def __init__(self, message: str, project_name: str = ""):
        self.message = message
        self.project_name = project_name
        super().__init__(f"[{project_name}] {message}" if project_name else message)


class InvalidVariantError(DroidPropsError, ValueError):
    """The explicitly configured variant does not exist."""
    def __init__(self, variant_name: str, candidates, project_name: str = ""):
        self.variant_name = variant_name
        self.candidates = list(candidates)
        super().__init__(
            f"Unable to find variant '{variant_name}' to use for analysis. "
            f"Candidates are: {', '.join(self.candidates)}",
            project_name,
        )


class ModelAccessError(DroidPropsError):
    """A build model accessor failed for a reason other than being unsupported."""
    pass


class ModelLoadError(DroidPropsError):
    """The build model document could not be parsed."""
    pass
