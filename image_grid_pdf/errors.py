"""
Error types raised by the pipeline.
"""


class ImageGridError(Exception):
	"""
	Base class for fatal pipeline errors.
	"""


class UsageError(ImageGridError):
	"""
	Missing or invalid command line arguments.
	"""


class InputError(ImageGridError):
	"""
	Input file missing, unreadable, corrupt, or with the wrong page count.
	"""


class OutputError(ImageGridError):
	"""
	Output file cannot be created or written.
	"""


class ResourceError(ImageGridError):
	"""
	Not enough memory for an intermediate buffer.
	"""
