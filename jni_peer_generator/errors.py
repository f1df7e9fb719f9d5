"""
Error kinds raised by the peer generator
"""

# Exit statuses used by the command line front end
EXIT_MODEL_ERROR = 15
EXIT_INTERNAL_BUG = 11
EXIT_IO_ERROR = 10


class PeerGeneratorError(Exception):
    """Base class for generator failures"""
    exit_status = 1


class ModelError(PeerGeneratorError):
    """The input model is wrong (missing namespace, unmappable type, ...)"""
    exit_status = EXIT_MODEL_ERROR


class InternalBugError(PeerGeneratorError):
    """A contract inside the generator was violated - a defect, not bad input"""
    exit_status = EXIT_INTERNAL_BUG
