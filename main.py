"""Entry point: run the VoteMatch API server."""

from web.backend.app import main

if __name__ == "__main__":
    main()
