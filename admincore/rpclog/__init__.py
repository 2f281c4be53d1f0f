"""Log fields, status codes and status-code to log-level mapping for RPC calls."""