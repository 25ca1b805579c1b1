"""NIFTY 50 constituents with display names and sectors."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StockInfo:
    symbol: str
    name: str
    sector: str


NIFTY_50: tuple[StockInfo, ...] = (
    StockInfo("RELIANCE", "Reliance Industries Ltd.", "Oil & Gas"),
    StockInfo("TCS", "Tata Consultancy Services Ltd.", "IT Services"),
    StockInfo("HDFCBANK", "HDFC Bank Ltd.", "Banking"),
    StockInfo("INFY", "Infosys Ltd.", "IT Services"),
    StockInfo("HINDUNILVR", "Hindustan Unilever Ltd.", "FMCG"),
    StockInfo("ICICIBANK", "ICICI Bank Ltd.", "Banking"),
    StockInfo("KOTAKBANK", "Kotak Mahindra Bank Ltd.", "Banking"),
    StockInfo("BHARTIARTL", "Bharti Airtel Ltd.", "Telecom"),
    StockInfo("ITC", "ITC Ltd.", "FMCG"),
    StockInfo("SBIN", "State Bank of India", "Banking"),
    StockInfo("LT", "Larsen & Toubro Ltd.", "Engineering"),
    StockInfo("ASIANPAINT", "Asian Paints Ltd.", "Paints"),
    StockInfo("AXISBANK", "Axis Bank Ltd.", "Banking"),
    StockInfo("MARUTI", "Maruti Suzuki India Ltd.", "Auto"),
    StockInfo("NESTLEIND", "Nestle India Ltd.", "FMCG"),
    StockInfo("HCLTECH", "HCL Technologies Ltd.", "IT Services"),
    StockInfo("BAJFINANCE", "Bajaj Finance Ltd.", "NBFC"),
    StockInfo("TITAN", "Titan Company Ltd.", "Jewellery"),
    StockInfo("ULTRACEMCO", "UltraTech Cement Ltd.", "Cement"),
    StockInfo("WIPRO", "Wipro Ltd.", "IT Services"),
    StockInfo("SUNPHARMA", "Sun Pharmaceutical Industries Ltd.", "Pharma"),
    StockInfo("ONGC", "Oil and Natural Gas Corporation Ltd.", "Oil & Gas"),
    StockInfo("NTPC", "NTPC Ltd.", "Power"),
    StockInfo("TECHM", "Tech Mahindra Ltd.", "IT Services"),
    StockInfo("POWERGRID", "Power Grid Corporation of India Ltd.", "Power"),
    StockInfo("TATAMOTORS", "Tata Motors Ltd.", "Auto"),
    StockInfo("BAJAJFINSV", "Bajaj Finserv Ltd.", "Financial Services"),
    StockInfo("DRREDDY", "Dr. Reddy's Laboratories Ltd.", "Pharma"),
    StockInfo("JSWSTEEL", "JSW Steel Ltd.", "Steel"),
    StockInfo("GRASIM", "Grasim Industries Ltd.", "Cement"),
    StockInfo("INDUSINDBK", "IndusInd Bank Ltd.", "Banking"),
    StockInfo("ADANIENT", "Adani Enterprises Ltd.", "Diversified"),
    StockInfo("TATASTEEL", "Tata Steel Ltd.", "Steel"),
    StockInfo("CIPLA", "Cipla Ltd.", "Pharma"),
    StockInfo("COALINDIA", "Coal India Ltd.", "Mining"),
    StockInfo("HINDALCO", "Hindalco Industries Ltd.", "Metals"),
    StockInfo("BRITANNIA", "Britannia Industries Ltd.", "FMCG"),
    StockInfo("EICHERMOT", "Eicher Motors Ltd.", "Auto"),
    StockInfo("HEROMOTOCO", "Hero MotoCorp Ltd.", "Auto"),
    StockInfo("UPL", "UPL Ltd.", "Chemicals"),
    StockInfo("APOLLOHOSP", "Apollo Hospitals Enterprise Ltd.", "Healthcare"),
    StockInfo("DIVISLAB", "Divi's Laboratories Ltd.", "Pharma"),
    StockInfo("TATACONSUM", "Tata Consumer Products Ltd.", "FMCG"),
    StockInfo("BAJAJ-AUTO", "Bajaj Auto Ltd.", "Auto"),
    StockInfo("BPCL", "Bharat Petroleum Corporation Ltd.", "Oil & Gas"),
    StockInfo("ADANIPORTS", "Adani Ports and Special Economic Zone Ltd.", "Infrastructure"),
    StockInfo("LTIM", "LTIMindtree Ltd.", "IT Services"),
    StockInfo("HDFCLIFE", "HDFC Life Insurance Company Ltd.", "Insurance"),
    StockInfo("SBILIFE", "SBI Life Insurance Company Ltd.", "Insurance"),
    StockInfo("SHRIRAMFIN", "Shriram Finance Ltd.", "NBFC"),
)

_BY_SYMBOL: dict[str, StockInfo] = {info.symbol: info for info in NIFTY_50}

DEFAULT_SECTOR = "Diversified"


def nifty50_symbols() -> list[str]:
    return [info.symbol for info in NIFTY_50]


def stock_info(symbol: str) -> StockInfo:
    """Known constituent info, or a placeholder for symbols outside the index."""
    return _BY_SYMBOL.get(symbol, StockInfo(symbol, f"{symbol} Ltd.", DEFAULT_SECTOR))
