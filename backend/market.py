"""
Agri Advisor - weather snapshot and mandi price board served by the API.
"""
from typing import List

from schemas import MarketPrice, WeatherReport

WEATHER_SNAPSHOT = WeatherReport(temp=28, humidity=65, rainfall="Moderate", condition="Cloudy")

MARKET_PRICES: List[MarketPrice] = [
    MarketPrice(crop="Wheat", price="2200/quintal", change="+5%"),
    MarketPrice(crop="Rice", price="1900/quintal", change="-2%"),
    MarketPrice(crop="Cotton", price="6000/quintal", change="+1.5%"),
    MarketPrice(crop="Maize", price="1500/quintal", change="0%"),
    MarketPrice(crop="Tomato", price="1200/quintal", change="+10%"),
]

