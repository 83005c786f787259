from __future__ import annotations

from chatwire.exceptions import ChatWireError
from chatwire.exceptions import EncodeNotSupportedError
from chatwire.exceptions import FunctionCallDecodeError
from chatwire.exceptions import JsonReaderError
from chatwire.exceptions import UnsupportedArgumentKindError
from chatwire.json.function_call import DecoderConfig
from chatwire.json.function_call import FunctionCallDecoder
from chatwire.json.function_call import decode_function_call
from chatwire.json.function_call import encode_function_call
from chatwire.json.reader import JsonTokenReader
from chatwire.json.reader import JsonTokenType
from chatwire.types.completion import ChatCompletion
from chatwire.types.completion import Choice
from chatwire.types.completion import decode_chat_completion
from chatwire.types.function_call import ArgumentDefinition
from chatwire.types.function_call import ArgumentType
from chatwire.types.function_call import FunctionCall
from chatwire.types.message import Message
from chatwire.types.usage import Usage

__title__ = "chatwire"
__version__ = "0.1.0"

__all__ = [
    "ArgumentDefinition",
    "ArgumentType",
    "ChatCompletion",
    "ChatWireError",
    "Choice",
    "DecoderConfig",
    "EncodeNotSupportedError",
    "FunctionCall",
    "FunctionCallDecodeError",
    "FunctionCallDecoder",
    "JsonReaderError",
    "JsonTokenReader",
    "JsonTokenType",
    "Message",
    "UnsupportedArgumentKindError",
    "Usage",
    "decode_chat_completion",
    "decode_function_call",
    "encode_function_call",
]
