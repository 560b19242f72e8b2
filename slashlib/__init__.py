"""Object model, CGI/FastCGI request helpers, codecs, digests, inflection and sockets."""

__version__ = "0.1.0"

__all__ = [
    "objmodel",
    "platform",
    "base64codec",
    "inflect",
    "http_status",
    "digests",
    "jsoncodec",
    "cgiapi",
    "cgirequest",
    "cgi",
    "lineinput",
    "sockets",
]