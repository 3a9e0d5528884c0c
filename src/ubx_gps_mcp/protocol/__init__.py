"""Protocol layer: UBX framing, checksum, streaming decoder, command builders and payload parsing."""

from .framing import Frame, build_frame, parse_frame
from .commands import MessageClass, build_command, startup_commands
from .decoder import DecoderState, FrameDecoder
