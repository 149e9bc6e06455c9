class RoutingKey:
    PROJECT_PHASE_PRODUCT_ADDED = "project.phase.product.added"
