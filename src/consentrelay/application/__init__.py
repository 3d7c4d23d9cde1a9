"""
应用层：解析、同意判定、分发与响应组装。
"""
