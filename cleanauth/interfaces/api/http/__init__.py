"""HTTP interface: routers, DTOs and use-case error mapping."""
