"""PublicInput e2e suite: page objects, login orchestration and support services."""
