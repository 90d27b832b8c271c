from prometheus_client import Counter


class MarketplaceMetrics:
    """
    Marketplace core metrics collector

    Tracks authentication outcomes and catalog mutations; scraped from /metrics
    """

    def __init__(self):
        # ========== Identity Metrics ==========
        self.login_attempts = Counter(
            'marketplace_login_attempts_total',
            'Login attempts',
            ['result'],  # result: success/failure
        )

        self.registrations = Counter(
            'marketplace_registrations_total',
            'Successful user registrations',
            ['role'],
        )

        # ========== Catalog Metrics ==========
        self.catalog_mutations = Counter(
            'marketplace_catalog_mutations_total',
            'Catalog mutations',
            ['operation', 'result'],  # operation: create/update/update_quantity/delete
        )

    def record_login(self, *, success: bool) -> None:
        self.login_attempts.labels(result='success' if success else 'failure').inc()

    def record_registration(self, *, role: str) -> None:
        self.registrations.labels(role=role).inc()

    def record_catalog_mutation(self, *, operation: str, result: str) -> None:
        self.catalog_mutations.labels(operation=operation, result=result).inc()


metrics = MarketplaceMetrics()
