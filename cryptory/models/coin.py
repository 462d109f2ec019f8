"""Coin catalog models: coins and their display symbols."""
import enum
from sqlalchemy import Column, Integer, String, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship
from cryptory.core.database import Base

# Length of the quote-currency prefix in an exchange code ("KRW-")
QUOTE_PREFIX_LENGTH = 4


def display_symbol(code: str) -> str:
    """Strip the quote-currency prefix from an exchange code.

    Args:
        code: Exchange code (e.g., "KRW-BTC")

    Returns:
        Base-currency ticker (e.g., "BTC")
    """
    return code[QUOTE_PREFIX_LENGTH:]


class CoinSymbolCode(enum.Enum):
    """Known coin symbols seeded into the catalog: (color, logo url)."""
    BTC = ("#F7931A", "https://static.upbit.com/logos/BTC.png")
    ETH = ("#627EEA", "https://static.upbit.com/logos/ETH.png")
    XRP = ("#23292F", "https://static.upbit.com/logos/XRP.png")
    DOGE = ("#C2A633", "https://static.upbit.com/logos/DOGE.png")
    ADA = ("#0033AD", "https://static.upbit.com/logos/ADA.png")
    SOL = ("#9945FF", "https://static.upbit.com/logos/SOL.png")
    AVAX = ("#E84142", "https://static.upbit.com/logos/AVAX.png")
    TRX = ("#FF060A", "https://static.upbit.com/logos/TRX.png")
    DOT = ("#E6007A", "https://static.upbit.com/logos/DOT.png")
    LINK = ("#2A5ADA", "https://static.upbit.com/logos/LINK.png")
    BCH = ("#8DC351", "https://static.upbit.com/logos/BCH.png")
    ETC = ("#328332", "https://static.upbit.com/logos/ETC.png")
    XLM = ("#14B6E7", "https://static.upbit.com/logos/XLM.png")
    ATOM = ("#2E3148", "https://static.upbit.com/logos/ATOM.png")
    NEAR = ("#000000", "https://static.upbit.com/logos/NEAR.png")
    SAND = ("#04ADEF", "https://static.upbit.com/logos/SAND.png")
    MANA = ("#FF2D55", "https://static.upbit.com/logos/MANA.png")
    AXS = ("#0055D5", "https://static.upbit.com/logos/AXS.png")
    AAVE = ("#B6509E", "https://static.upbit.com/logos/AAVE.png")
    SHIB = ("#FFA409", "https://static.upbit.com/logos/SHIB.png")
    POL = ("#8247E5", "https://static.upbit.com/logos/POL.png")
    SUI = ("#4DA2FF", "https://static.upbit.com/logos/SUI.png")
    APT = ("#06F7F7", "https://static.upbit.com/logos/APT.png")
    ARB = ("#28A0F0", "https://static.upbit.com/logos/ARB.png")
    HBAR = ("#222222", "https://static.upbit.com/logos/HBAR.png")
    ALGO = ("#000000", "https://static.upbit.com/logos/ALGO.png")
    EOS = ("#000000", "https://static.upbit.com/logos/EOS.png")
    SEI = ("#9B1C2E", "https://static.upbit.com/logos/SEI.png")
    STX = ("#5546FF", "https://static.upbit.com/logos/STX.png")
    GRT = ("#6747ED", "https://static.upbit.com/logos/GRT.png")

    @property
    def code(self) -> str:
        return self.name

    @property
    def color(self) -> str:
        return self.value[0]

    @property
    def logo_url(self) -> str:
        return self.value[1]

    @classmethod
    def from_market(cls, market: str):
        """Look up the symbol for an exchange code, or None if unknown."""
        return cls.__members__.get(display_symbol(market))


class CoinSymbol(Base):
    """Display metadata shared by every coin trading the same base currency."""
    __tablename__ = "coin_symbols"

    id = Column(Integer, primary_key=True, index=True)

    # Base-currency ticker (e.g., "BTC")
    code = Column(String(20), unique=True, index=True, nullable=False)

    color = Column(String(20), nullable=True)
    logo_url = Column(Text, nullable=True)

    def __repr__(self):
        return f"<CoinSymbol(code='{self.code}')>"


class Coin(Base):
    """Coin model for the public catalog.

    The display symbol is always derived from ``code`` and never stored.
    """
    __tablename__ = "coins"

    id = Column(Integer, primary_key=True, index=True)

    # Korean name (e.g., "비트코인")
    korean_name = Column(String(100), nullable=False)

    # English name (e.g., "Bitcoin")
    english_name = Column(String(100), nullable=False)

    # Market identifier (e.g., "KRW-BTC")
    code = Column(String(50), unique=True, index=True, nullable=False)

    coin_symbol_id = Column(Integer, ForeignKey("coin_symbols.id"), nullable=True)
    coin_symbol = relationship(CoinSymbol, lazy="joined")

    # Whether this coin is shown on the public front page
    is_displayed = Column(Boolean, default=False, nullable=False)

    @property
    def symbol(self) -> str:
        return display_symbol(self.code)

    def __repr__(self):
        return f"<Coin(code='{self.code}', korean_name='{self.korean_name}')>"
