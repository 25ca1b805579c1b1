from swingscreener.indicators.builtin.momentum import MACD, RSI
from swingscreener.indicators.builtin.moving_average import EMA, SMA
from swingscreener.indicators.builtin.volatility import BollingerBands
from swingscreener.indicators.builtin.volume import VolumeRatio

__all__ = ["SMA", "EMA", "RSI", "MACD", "BollingerBands", "VolumeRatio"]
