"""Implementation modules for ``medchat_stream.base.cancellation``."""
