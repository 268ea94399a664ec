"""gitops-demo HTTP service exposing probe and build-info endpoints."""
