"""Closed value sets for listing queries.

Each enumeration carries the exact string Reddit expects in the query
string, so members can be interpolated directly into URLs.
"""

from enum import Enum


class PopularitySort(str, Enum):
    """Ordering of a listing by popularity."""

    DEFAULT = ""
    HOT = "hot"
    NEW = "new"
    RISING = "rising"
    TOP = "top"
    CONTROVERSIAL = "controversial"


class AgeSort(str, Enum):
    """Time window applied to top/controversial listings."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class Region(str, Enum):
    """Geography used to restrict "hot" listings."""

    GLOBAL = "GLOBAL"
    USA = "US"
    ARGENTINA = "AR"
    AUSTRALIA = "AU"
    BULGARIA = "BG"
    CANADA = "CA"
    CHILE = "CL"
    COLOMBIA = "CO"
    CROATIA = "HR"
    CZECH_REPUBLIC = "CZ"
    FINLAND = "FI"
    GREECE = "GR"
    HUNGARY = "HU"
    ICELAND = "IS"
    INDIA = "IN"
    IRELAND = "IE"
    JAPAN = "JP"
    MALAYSIA = "MY"
    MEXICO = "MX"
    NEW_ZEALAND = "NZ"
    PHILIPPINES = "PH"
    POLAND = "PL"
    PORTUGAL = "PT"
    PUERTO_RICO = "PR"
    ROMANIA = "RO"
    SERBIA = "RS"
    SINGAPORE = "SG"
    SWEDEN = "SE"
    TAIWAN = "TW"
    THAILAND = "TH"
    TURKEY = "TR"
    UNITED_KINGDOM = "GB"
    US_ALASKA = "US_AK"
    US_ALABAMA = "US_AL"
    US_ARKANSAS = "US_AR"
    US_ARIZONA = "US_AZ"
    US_CALIFORNIA = "US_CA"
    US_COLORADO = "US_CO"
    US_CONNECTICUT = "US_CT"
    US_DC = "US_DC"
    US_DELAWARE = "US_DE"
    US_FLORIDA = "US_FL"
    US_GEORGIA = "US_GA"
    US_HAWAII = "US_HI"
    US_IOWA = "US_IA"
    US_IDAHO = "US_ID"
    US_ILLINOIS = "US_IL"
    US_INDIANA = "US_IN"
    US_KANSAS = "US_KS"
    US_KENTUCKY = "US_KY"
    US_LOUISIANA = "US_LA"
    US_MASSACHUSETTS = "US_MA"
    US_MARYLAND = "US_MD"
    US_MAINE = "US_ME"
    US_MICHIGAN = "US_MI"
    US_MINNESOTA = "US_MN"
    US_MISSOURI = "US_MO"
    US_MISSISSIPPI = "US_MS"
    US_MONTANA = "US_MT"
    US_NORTH_CAROLINA = "US_NC"
    US_NORTH_DAKOTA = "US_ND"
    US_NEBRASKA = "US_NE"
    US_NEW_HAMPSHIRE = "US_NH"
    US_NEW_JERSEY = "US_NJ"
    US_NEW_MEXICO = "US_NM"
    US_NEVADA = "US_NV"
    US_NEW_YORK = "US_NY"
    US_OHIO = "US_OH"
    US_OKLAHOMA = "US_OK"
    US_OREGON = "US_OR"
    US_PENNSYLVANIA = "US_PA"
    US_RHODE_ISLAND = "US_RI"
    US_SOUTH_CAROLINA = "US_SC"
    US_SOUTH_DAKOTA = "US_SD"
    US_TENNESSEE = "US_TN"
    US_TEXAS = "US_TX"
    US_UTAH = "US_UT"
    US_VIRGINIA = "US_VA"
    US_VERMONT = "US_VT"
    US_WASHINGTON = "US_WA"
    US_WISCONSIN = "US_WI"
    US_WEST_VIRGINIA = "US_WV"
    US_WYOMING = "US_WY"
