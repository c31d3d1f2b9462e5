from dependency_injector import containers, providers

from swaptax.accounting.tax_engine import TaxEngine
from swaptax.config import Settings
from swaptax.db.repos.price_cache_repo import PriceCacheRepo
from swaptax.db.session import build_engine, build_session_factory
from swaptax.domain.models.tax_config import TaxConfig
from swaptax.infra.fx.exchange_rate import FxConverter
from swaptax.infra.http.rate_limited_client import RateLimitedClient
from swaptax.infra.price.birdeye import BirdeyeProvider
from swaptax.infra.price.dexscreener import DexScreenerProvider
from swaptax.infra.price.service import PriceService


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["swaptax.api.deps"])

    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    tax_config = providers.Singleton(TaxConfig.from_settings, settings=settings)

    http_client = providers.Singleton(
        RateLimitedClient,
        rate_per_second=settings.provided.http_rate_per_second,
        timeout=settings.provided.http_timeout,
    )

    price_cache = providers.Singleton(PriceCacheRepo, session_factory=session_factory)

    birdeye = providers.Singleton(
        BirdeyeProvider,
        http_client=http_client,
        api_key=settings.provided.birdeye_api_key,
    )

    dexscreener = providers.Singleton(DexScreenerProvider, http_client=http_client)

    price_service = providers.Singleton(
        PriceService,
        primary=birdeye,
        secondary=dexscreener,
        cache=price_cache,
        config=tax_config,
    )

    fx_converter = providers.Singleton(
        FxConverter,
        http_client=http_client,
        config=tax_config,
        url=settings.provided.fx_rate_url,
    )

    tax_engine = providers.Factory(
        TaxEngine,
        price_service=price_service,
        fx_converter=fx_converter,
        config=tax_config,
    )
