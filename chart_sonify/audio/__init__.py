"""
Audio - Tone rendering boundary and a numpy reference synthesizer.

Usage:
    from chart_sonify.audio import ToneSynthesizer

    synth = ToneSynthesizer()
    synth.emit_tone(bin_index=30, pan=-0.5, duration_seconds=0.25)
    pcm = synth.mixdown()  # float32, shape (samples, 2)
"""

from chart_sonify.audio.synth import (
    RenderedNote,
    SynthConfig,
    ToneRenderer,
    ToneSynthesizer,
    mix_at,
    render_tone,
)

__all__ = [
    "RenderedNote",
    "SynthConfig",
    "ToneRenderer",
    "ToneSynthesizer",
    "mix_at",
    "render_tone",
]
