"""Donchian Channel Breakouts."""

import logging
from typing import Optional, Sequence

from candlelens.extraction.models import Candle
from candlelens.indicators.config import (
    DEFAULT_DONCHIAN_CONFIG,
    ChannelPosition,
    DonchianConfig,
)
from candlelens.indicators.models import DonchianChannel, DonchianResult
from candlelens.indicators.series import to_frame
from candlelens.signals import Signal

logger = logging.getLogger(__name__)


class DonchianAnalyzer:
    """Rolling high/low channels with a sustained-close breakout rule.

    A breakout needs each of the last ``confirmation_bars`` closes inside
    the threshold band at the channel extreme, so a one-bar spike that
    retraces does not signal.
    """

    def __init__(self, config: Optional[DonchianConfig] = None) -> None:
        self.config = config or DEFAULT_DONCHIAN_CONFIG

    def analyze(self, candles: Sequence[Candle]) -> DonchianResult:
        if not self.config.periods or len(candles) < min(self.config.periods):
            return DonchianResult()

        frame = to_frame(candles)
        channels = [
            self.channel(frame, period)
            for period in self.config.periods
            if len(frame) >= period
        ]

        best: Optional[DonchianChannel] = None
        for channel in channels:
            if best is None or channel.strength > best.strength:
                best = channel

        if best is None or best.signal is Signal.HOLD:
            return DonchianResult(channels=tuple(channels))
        return DonchianResult(
            signal=best.signal,
            strength=best.strength,
            position=best.position,
            channels=tuple(channels),
        )

    def channel(self, frame, period: int) -> DonchianChannel:
        """Channel and breakout state for one lookback period."""
        window = frame.iloc[-period:]
        highest = float(window["high"].max())
        lowest = float(window["low"].min())
        recent = frame["close"].iloc[-self.config.confirmation_bars:]
        threshold = self.config.breakout_threshold

        if len(recent) >= self.config.confirmation_bars and (recent > highest * (1 - threshold)).all():
            return DonchianChannel(
                period=period,
                highest=highest,
                lowest=lowest,
                signal=Signal.BUY,
                strength=self.config.breakout_strength,
                position=ChannelPosition.UPPER_BREAKOUT,
            )
        if len(recent) >= self.config.confirmation_bars and (recent < lowest * (1 + threshold)).all():
            return DonchianChannel(
                period=period,
                highest=highest,
                lowest=lowest,
                signal=Signal.SELL,
                strength=self.config.breakout_strength,
                position=ChannelPosition.LOWER_BREAKOUT,
            )
        return DonchianChannel(period=period, highest=highest, lowest=lowest)
