"""Well-known identifiers: premade voices, model ids and audio output formats."""

from __future__ import annotations

from enum import Enum


class _ValueEnum(str, Enum):
    """String enum whose ``str()`` is the wire value."""

    def __str__(self) -> str:
        return self.value


class DefaultVoice(_ValueEnum):
    """Premade voices available to every account."""

    ARIA = "9BWtsMINqrJLrRacOk9x"
    ROGER = "CwhRBWXzGAHq8TQ4Fs17"
    SARAH = "EXAVITQu4vr4xnSDxMaL"
    LAURA = "FGY2WhTYpPnrIDTdsKH5"
    CHARLIE = "IKne3meq5aSn9XLyUdCD"
    GEORGE = "JBFqnCBsd6RMkjVDRZzb"
    CALLUM = "N2lVS1w4EtoT3dr4eOWO"
    RIVER = "SAz9YHcvj6GT2YYXdXww"
    LIAM = "TX3LPaxmHKxFdv7VOQHJ"
    CHARLOTTE = "XB0fDUnXU5powFXDhCwa"
    ALICE = "Xb7hH8MSUJpSbSDYk0k2"
    MATILDA = "XrExE9yKIg1WjnnlVkGX"
    WILL = "bIHbv24MWmeRgasZH58o"
    JESSICA = "cgSgspJ2msm6clMCkdW9"
    ERIC = "cjVigY5qzO86Huf0OWal"
    CHRIS = "iP95p4xoKVk53GoZ742B"
    BRIAN = "nPczCjzI2devNBz1zQrb"
    DANIEL = "onwK4e9ZLuTAKqWW03F9"
    LILY = "pFZP5JQG7iQjIQuC4Bku"
    BILL = "pqHfZKP75CvOlQylNhV4"


class Model(_ValueEnum):
    """Speech synthesis model ids."""

    ELEVEN_MULTILINGUAL_V2 = "eleven_multilingual_v2"
    ELEVEN_MULTILINGUAL_V1 = "eleven_multilingual_v1"
    ELEVEN_ENGLISH_V1 = "eleven_monolingual_v1"
    ELEVEN_ENGLISH_STS_V2 = "eleven_english_sts_v2"
    ELEVEN_MULTILINGUAL_STS_V2 = "eleven_multilingual_sts_v2"
    ELEVEN_TURBO_V2 = "eleven_turbo_v2"
    ELEVEN_TURBO_V2_5 = "eleven_turbo_v2_5"
    ELEVEN_FLASH_V2 = "eleven_flash_v2"
    ELEVEN_FLASH_V2_5 = "eleven_flash_v2_5"


class SpeechToTextModel(_ValueEnum):
    SCRIBE_V1 = "scribe_v1"


class OutputFormat(_ValueEnum):
    """Audio output formats, named codec_samplerate[_bitrate]."""

    MP3_22050_32 = "mp3_22050_32"
    MP3_44100_32 = "mp3_44100_32"
    MP3_44100_64 = "mp3_44100_64"
    MP3_44100_96 = "mp3_44100_96"
    MP3_44100_128 = "mp3_44100_128"
    MP3_44100_192 = "mp3_44100_192"
    PCM_16000 = "pcm_16000"
    PCM_22050 = "pcm_22050"
    PCM_24000 = "pcm_24000"
    PCM_44100 = "pcm_44100"
    ULAW_8000 = "ulaw_8000"
