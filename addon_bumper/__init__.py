"""Keep addon .toc versions in sync and record releases in git."""
