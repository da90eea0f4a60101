"""Duplex conversational AI session over a WebSocket.

Lifecycle: ``CONNECTING -> OPEN -> CLOSING -> CLOSED``, with ``ERRORED``
absorbing. A session is OPEN only once the server's first frame, the
conversation initiation metadata, has arrived.

Two background tasks drive an open session:
- the receive loop decodes frames in server order onto the event buffer;
- the writer drains the outbound queue so concurrent senders never
  interleave frames.

Audio streams started with ``send_audio_stream`` run as further tasks owned
by the session and are cancelled with it.

Example:
    async with await Session.open(client, "agent_123") as session:
        async for event in session:
            if isinstance(event, ClientToolCall):
                await session.send_tool_result(ClientToolResult.success(event.id, "42"))
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable
from typing import TYPE_CHECKING, Any, NoReturn
from urllib.parse import urlencode

from pydantic import BaseModel
from websockets.asyncio.client import connect as websockets_connect
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK, WebSocketException

from ..config import SessionOptions
from ..endpoints.conversations import GetSignedUrl
from ..errors import (
    ConnectionClosedError,
    DecodeError,
    HandshakeError,
    ResourceExhaustedError,
    SessionClosedError,
    SessionError,
    TransportError,
)
from ..protocols import WebSocketConnection
from .events import DecodeFailure, SessionEvent, SessionState, ToolCallMismatch
from .messages import (
    ClientToolCall,
    ClientToolResult,
    ContextualUpdate,
    ConversationConfigOverride,
    ConversationInitiationClientData,
    ConversationInitiationMetadata,
    CustomLlmExtraBody,
    DynamicVariable,
    Ping,
    Pong,
    UserActivity,
    UserAudioChunk,
    UserMessage,
    parse_server_message,
    to_wire,
)

if TYPE_CHECKING:
    from ..client import ElevenLabsClient

logger = logging.getLogger(__name__)

CONVERSATION_PATH = "/v1/convai/conversation"

ConnectFactory = Callable[[str], Awaitable[WebSocketConnection]]

# Marks the end of the event stream
_END = object()


async def connect_websocket(url: str) -> WebSocketConnection:
    """Open a WebSocket with the ``websockets`` asyncio client.

    Raises:
        TransportError: If the connection or the opening handshake fails.
    """
    try:
        return await websockets_connect(url)
    except (OSError, asyncio.TimeoutError, WebSocketException) as e:
        raise TransportError(f"WebSocket connection failed: {type(e).__name__}: {e}") from e


def _log_send_failure(future: asyncio.Future[None]) -> None:
    if not future.cancelled() and future.exception() is not None:
        logger.debug(f"[SESSION] Automatic reply not sent: {future.exception()}")


def _log_audio_stream_end(task: asyncio.Task[int]) -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.warning(f"[SESSION] Audio stream stopped: {task.exception()}")


class Session:
    """A live conversation with an agent.

    Create sessions with ``Session.open``. Events are consumed once, by a
    single consumer, with ``async for event in session``.
    """

    def __init__(
        self,
        connection: WebSocketConnection,
        *,
        agent_id: str | None = None,
        options: SessionOptions | None = None,
    ) -> None:
        self._connection = connection
        self._options = options or SessionOptions()
        self._state = SessionState.CONNECTING
        self.agent_id = agent_id
        self.conversation_id: str | None = None
        self.initiation_metadata: ConversationInitiationMetadata | None = None

        self._outstanding_tool_calls: set[str] = set()
        # Unbounded; the receive loop enforces event_buffer_size itself
        self._events: asyncio.Queue[Any] = asyncio.Queue()
        self._outbound: asyncio.Queue[tuple[str, asyncio.Future[None]]] = asyncio.Queue()

        self._reader: asyncio.Task[None] | None = None
        self._writer: asyncio.Task[None] | None = None
        self._audio_tasks: set[asyncio.Task[int]] = set()
        self._error: BaseException | None = None
        self._finished = False
        self._shutting_down = False
        self._closing = False
        self._closed = asyncio.Event()
        self._consumed = False

    # =========================================================================
    # Opening
    # =========================================================================

    @classmethod
    async def open(
        cls,
        client: ElevenLabsClient,
        agent_id: str,
        *,
        dynamic_variables: dict[str, DynamicVariable] | None = None,
        overrides: ConversationConfigOverride | dict[str, Any] | None = None,
        custom_llm_extra_body: CustomLlmExtraBody | dict[str, Any] | None = None,
        signed: bool = False,
        options: SessionOptions | None = None,
        connect: ConnectFactory | None = None,
    ) -> Session:
        """Connect to an agent and complete the conversation handshake.

        Args:
            client: Client providing credentials and the WebSocket base URL.
            agent_id: Agent to talk to.
            dynamic_variables: Values for the agent's dynamic variables.
            overrides: Per-conversation agent/TTS overrides.
            custom_llm_extra_body: Extra parameters for a custom LLM.
            signed: Authenticate with a signed URL from ``GetSignedUrl``
                instead of passing the API key in the URL.
            options: Session tuning (timeouts, buffer size, policies).
            connect: Factory opening the WebSocket; defaults to ``websockets``.

        Returns:
            An OPEN session.

        Raises:
            TransportError: If the WebSocket could not be opened.
            APIError: If requesting the signed URL failed.
            HandshakeError: If no valid initiation metadata arrived in time.
        """
        initiation = None
        if dynamic_variables or overrides or custom_llm_extra_body:
            initiation = ConversationInitiationClientData(
                conversation_config_override=overrides,
                custom_llm_extra_body=custom_llm_extra_body,
                dynamic_variables=dynamic_variables,
            )

        url = await cls._conversation_url(client, agent_id, signed)
        logger.info(f"[SESSION] Connecting to agent {agent_id} (signed={signed})")
        connection = await (connect or connect_websocket)(url)

        session = cls(connection, agent_id=agent_id, options=options)
        await session.handshake(initiation)
        return session

    @staticmethod
    async def _conversation_url(client: ElevenLabsClient, agent_id: str, signed: bool) -> str:
        if signed:
            response = await client.hit(GetSignedUrl(agent_id))
            return response.signed_url
        query = urlencode({"agent_id": agent_id, "xi_api_key": client.api_key})
        return f"{client.ws_base_url}{CONVERSATION_PATH}?{query}"

    async def handshake(self, initiation: ConversationInitiationClientData | None = None) -> None:
        """Wait for the initiation metadata and start the session tasks.

        Called by ``open``. Sends ``initiation`` first when given.

        Raises:
            HandshakeError: If the first frame is missing, malformed or of
                another type. The session is left ERRORED and disconnected.

        Cancelling the handshake (e.g. a caller deadline) also closes the
        connection and leaves the session ERRORED.
        """
        if self._state is not SessionState.CONNECTING:
            raise SessionError(f"Handshake already attempted (state: {self._state.value})")
        timeout = self._options.handshake_timeout
        try:
            if initiation is not None:
                await self._connection.send(to_wire(initiation))
            raw = await asyncio.wait_for(self._connection.recv(), timeout)
        except asyncio.TimeoutError as e:
            await self._abort_handshake(f"No initiation metadata within {timeout}s", e)
        except ConnectionClosed as e:
            await self._abort_handshake(f"Connection closed during handshake: {e}", e)
        except asyncio.CancelledError:
            self._state = SessionState.ERRORED
            logger.info("[SESSION] Handshake cancelled")
            await self._close_connection(1000, "handshake cancelled")
            self._closed.set()
            raise

        try:
            message = parse_server_message(raw)
        except DecodeError as e:
            await self._abort_handshake(f"Malformed initiation message: {e}", e)

        if not isinstance(message, ConversationInitiationMetadata):
            await self._abort_handshake(
                f"Expected conversation_initiation_metadata first, got '{message.type}'"
            )

        self.initiation_metadata = message
        self.conversation_id = message.conversation_id
        self._state = SessionState.OPEN
        self._reader = asyncio.create_task(self._receive_loop())
        self._writer = asyncio.create_task(self._write_loop())
        logger.info(f"[SESSION] Conversation {self.conversation_id} open")

    async def _abort_handshake(self, reason: str, cause: BaseException | None = None) -> NoReturn:
        self._state = SessionState.ERRORED
        logger.warning(f"[SESSION] Handshake failed: {reason}")
        await self._close_connection(1002, "handshake failed")
        self._closed.set()
        raise HandshakeError(reason) from cause

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is SessionState.OPEN

    @property
    def options(self) -> SessionOptions:
        return self._options

    @property
    def outstanding_tool_calls(self) -> frozenset[str]:
        """Ids of tool calls received and not yet answered."""
        return frozenset(self._outstanding_tool_calls)

    # =========================================================================
    # Send path
    # =========================================================================

    def _enqueue(self, text: str) -> asyncio.Future[None]:
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._outbound.put_nowait((text, future))
        return future

    def _ensure_open(self) -> None:
        if self._state is not SessionState.OPEN:
            raise SessionClosedError(f"Cannot send while session is {self._state.value}")

    async def send(self, message: BaseModel) -> None:
        """Send any client message, waiting until its frame is written.

        Raises:
            SessionClosedError: If the session is not open or closes first.
            TransportError: If the socket failed while writing.
        """
        self._ensure_open()
        await self._enqueue(to_wire(message))

    async def send_audio(self, audio: bytes | str) -> None:
        """Send microphone audio (raw bytes, or already base64 encoded)."""
        if isinstance(audio, str):
            await self.send(UserAudioChunk(user_audio_chunk=audio))
        else:
            await self.send(UserAudioChunk.from_bytes(audio))

    def send_audio_stream(self, chunks: AsyncIterable[bytes | str]) -> asyncio.Task[int]:
        """Forward a microphone stream to the agent in the background.

        Each chunk is sent as one audio frame, in order, once the previous one
        was written. The task belongs to the session and is cancelled when it
        closes.

        Args:
            chunks: Raw audio bytes (or base64 strings) in the agent's input format.

        Returns:
            The pumping task; it resolves to the number of chunks sent.

        Raises:
            SessionClosedError: If the session is not open.
        """
        self._ensure_open()
        task = asyncio.create_task(self._pump_audio(chunks))
        self._audio_tasks.add(task)
        task.add_done_callback(self._audio_tasks.discard)
        task.add_done_callback(_log_audio_stream_end)
        return task

    async def _pump_audio(self, chunks: AsyncIterable[bytes | str]) -> int:
        sent = 0
        async for chunk in chunks:
            await self.send_audio(chunk)
            sent += 1
        logger.debug(f"[SESSION] Audio stream finished after {sent} chunks")
        return sent

    async def send_context_update(self, text: str) -> None:
        await self.send(ContextualUpdate(text=text))

    async def send_user_message(self, text: str) -> None:
        await self.send(UserMessage(text=text))

    async def send_user_activity(self) -> None:
        await self.send(UserActivity())

    async def send_tool_result(self, result: ClientToolResult) -> None:
        """Answer a client tool call.

        A result whose id is not outstanding publishes a ``ToolCallMismatch``
        event; it is still forwarded unless ``strict_tool_results`` is set.
        """
        self._ensure_open()
        tool_call_id = result.tool_call_id
        if tool_call_id in self._outstanding_tool_calls:
            self._outstanding_tool_calls.discard(tool_call_id)
        else:
            forwarded = not self._options.strict_tool_results
            logger.warning(
                f"[SESSION] Tool result for unknown call '{tool_call_id}' "
                f"({'forwarded' if forwarded else 'dropped'})"
            )
            self._events.put_nowait(ToolCallMismatch(tool_call_id=tool_call_id, forwarded=forwarded))
            if not forwarded:
                return
        await self.send(result)

    async def _write_loop(self) -> None:
        while True:
            text, future = await self._outbound.get()
            if future.done():
                continue
            try:
                await self._connection.send(text)
            except asyncio.CancelledError:
                if not future.done():
                    future.set_exception(SessionClosedError("Session closed before the frame was written"))
                raise
            except ConnectionClosed as e:
                future.set_exception(SessionClosedError(f"Connection closed: {e}"))
            except OSError as e:
                future.set_exception(TransportError(f"WebSocket write failed: {e}"))
            except Exception as e:
                logger.exception(f"[SESSION] Writer failed: {e}")
                error = TransportError(f"WebSocket write failed: {type(e).__name__}: {e}")
                error.__cause__ = e
                future.set_exception(error)
                self._fail_pending_sends()
                await self._shutdown(error, close_code=1011)
                return
            else:
                if not future.done():
                    future.set_result(None)

    def _fail_pending_sends(self) -> None:
        while not self._outbound.empty():
            _, future = self._outbound.get_nowait()
            if not future.done():
                future.set_exception(SessionClosedError("Session closed"))

    # =========================================================================
    # Receive path
    # =========================================================================

    def _decode(self, raw: str | bytes) -> SessionEvent:
        try:
            message = parse_server_message(raw)
        except DecodeError as e:
            text = raw if isinstance(raw, str) else raw.decode("utf-8", errors="replace")
            logger.warning(f"[SESSION] Undecodable frame: {text[:200]}")
            return DecodeFailure(error=str(e), payload=text[:1000])

        if isinstance(message, ClientToolCall):
            self._outstanding_tool_calls.add(message.id)
        return message

    async def _receive_loop(self) -> None:
        limit = self._options.event_buffer_size
        try:
            while True:
                raw = await self._connection.recv()
                if self._events.qsize() >= limit:
                    raise ResourceExhaustedError(limit)

                event = self._decode(raw)
                logger.debug(f"[SESSION] <- {event.type}")
                self._events.put_nowait(event)

                if isinstance(event, Ping) and self._options.auto_pong and self.is_open:
                    self._enqueue(to_wire(Pong(event_id=event.event_id))).add_done_callback(
                        _log_send_failure
                    )
        except ConnectionClosedOK:
            logger.info(f"[SESSION] Conversation {self.conversation_id} closed by server")
            await self._shutdown(None)
        except ConnectionClosed as e:
            code = e.rcvd.code if e.rcvd is not None else None
            reason = e.rcvd.reason if e.rcvd is not None else ""
            logger.warning(f"[SESSION] Connection closed abnormally (code={code}, reason={reason!r})")
            await self._shutdown(ConnectionClosedError(code, reason))
        except ResourceExhaustedError as e:
            logger.warning(f"[SESSION] {e}")
            await self._shutdown(e, close_code=1008)
        except Exception as e:
            logger.exception(f"[SESSION] Receive loop failed: {e}")
            await self._shutdown(e)

    def _tasks(self) -> list[asyncio.Task[Any]]:
        tasks: list[asyncio.Task[Any]] = [*self._audio_tasks]
        for task in (self._reader, self._writer):
            if task is not None:
                tasks.append(task)
        return tasks

    async def _shutdown(self, error: BaseException | None, close_code: int = 1000) -> None:
        """Terminate from a session task after a close or failure."""
        if self._shutting_down:
            return
        self._shutting_down = True
        # Recorded before any await so a concurrent close() cannot lose it
        if error is not None and self._error is None:
            self._error = error

        current = asyncio.current_task()
        for task in self._tasks():
            if task is not current and not task.done():
                task.cancel()
        await self._close_connection(close_code, "" if error is None else type(error).__name__)
        self._finish(error)

    def _finish(self, error: BaseException | None) -> None:
        if self._finished:
            return
        self._finished = True
        if self._error is None:
            self._error = error
        if self._state is not SessionState.ERRORED:
            self._state = SessionState.CLOSED if self._error is None else SessionState.ERRORED
        self._fail_pending_sends()
        self._events.put_nowait(_END)
        self._closed.set()

    def events(self) -> AsyncIterator[SessionEvent]:
        """Return the session's event stream. It can be consumed only once."""
        if self._consumed:
            raise SessionError("The event stream of a session can only be consumed once")
        self._consumed = True
        return self._iterate_events()

    async def _iterate_events(self) -> AsyncIterator[SessionEvent]:
        while True:
            item = await self._events.get()
            if item is _END:
                if self._error is not None:
                    raise self._error
                return
            yield item

    def __aiter__(self) -> AsyncIterator[SessionEvent]:
        return self.events()

    # =========================================================================
    # Closing
    # =========================================================================

    async def _close_connection(self, code: int, reason: str) -> None:
        try:
            await self._connection.close(code, reason)
        except (ConnectionClosed, OSError) as e:
            logger.debug(f"[SESSION] Connection already gone on close: {e}")

    async def close(self) -> None:
        """Close the session. Safe to call repeatedly and concurrently."""
        if self._finished or self._state is SessionState.ERRORED:
            return
        if self._closing:
            await self._closed.wait()
            return
        self._closing = True
        if self._state is SessionState.OPEN:
            self._state = SessionState.CLOSING
        logger.info(f"[SESSION] Closing conversation {self.conversation_id}")

        current = asyncio.current_task()
        tasks = [task for task in self._tasks() if task is not current and not task.done()]
        if self._shutting_down:
            # A session task is already terminating; let it record its error
            await asyncio.gather(*tasks, return_exceptions=True)
        else:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        if not self._finished:
            await self._close_connection(1000, "")
            self._finish(None)

    async def __aenter__(self) -> Session:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
