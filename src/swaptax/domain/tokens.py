"""Well-known Solana token mints and the default base / major token sets."""

SOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
USDT_MINT = "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB"
MSOL_MINT = "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So"
BONK_MINT = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"
WORMHOLE_ETH_MINT = "7vfCXTUXx5WJV5JADk17DUJ4ksgau7utNKj4b963voxs"
JUP_MINT = "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN"

# Cash-equivalents: swaps into/out of these are acquisitions/disposals of the other leg
DEFAULT_BASE_TOKENS: frozenset[str] = frozenset({SOL_MINT, USDC_MINT, USDT_MINT})

# Frequently looked up and price-stable enough to cache
DEFAULT_MAJOR_TOKENS: frozenset[str] = frozenset({
    SOL_MINT,
    USDC_MINT,
    USDT_MINT,
    MSOL_MINT,
    BONK_MINT,
    WORMHOLE_ETH_MINT,
    JUP_MINT,
})

KNOWN_SYMBOLS: dict[str, str] = {
    SOL_MINT: "SOL",
    USDC_MINT: "USDC",
    USDT_MINT: "USDT",
    MSOL_MINT: "mSOL",
    BONK_MINT: "BONK",
    WORMHOLE_ETH_MINT: "ETH",
    JUP_MINT: "JUP",
}


def short_symbol(mint: str) -> str:
    """Known symbol for a mint, else an abbreviated address (``abcd...wxyz``)."""
    if mint in KNOWN_SYMBOLS:
        return KNOWN_SYMBOLS[mint]
    if len(mint) <= 8:
        return mint
    return f"{mint[:4]}...{mint[-4:]}"
