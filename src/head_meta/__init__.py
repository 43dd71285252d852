from head_meta.accumulator import Abort, Complete, Continue, HeadAccumulator
from head_meta.client import HeadMetaScraper, ScrapeOutcome, fetch_head_meta, strip_protocol
from head_meta.config import Settings, load_settings
from head_meta.errors import BadResponse, EmptyHead, HeadMetaError, TransportFailure
from head_meta.html_head import extract_meta_pairs, normalize_key, parse_head_meta, tokenize_meta_tags
from head_meta.session import Done, Failed, Pending, StreamSession

__all__ = [
    "__version__",
    "Abort",
    "BadResponse",
    "Complete",
    "Continue",
    "Done",
    "EmptyHead",
    "Failed",
    "HeadAccumulator",
    "HeadMetaError",
    "HeadMetaScraper",
    "Pending",
    "ScrapeOutcome",
    "Settings",
    "StreamSession",
    "TransportFailure",
    "extract_meta_pairs",
    "fetch_head_meta",
    "load_settings",
    "normalize_key",
    "parse_head_meta",
    "strip_protocol",
    "tokenize_meta_tags",
]

__version__ = "0.1.0"
