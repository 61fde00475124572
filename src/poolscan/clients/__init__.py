from poolscan.clients.rpc import RPC

__all__ = ["RPC"]
