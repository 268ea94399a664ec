"""Allow `python -m gitops_demo` to start the service."""

from gitops_demo.main import main

main()
