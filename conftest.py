# Root conftest.py - sits at the project root so pytest puts the root on sys.path
# and `nftledger` imports without an install.
