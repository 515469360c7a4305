"""Studio scheduler gateway: generic table-proxy REST API over a hosted store."""
