from customer_sim.gateway.chat_client import ChatGateway, HttpChatGateway
from customer_sim.gateway.speech_client import (
    HttpSpeechGateway,
    PlaybackBusyError,
    PlaybackError,
    SpeechService,
)
from customer_sim.gateway.transport import GatewayError

__all__ = [
    "ChatGateway",
    "HttpChatGateway",
    "HttpSpeechGateway",
    "SpeechService",
    "GatewayError",
    "PlaybackBusyError",
    "PlaybackError",
]
