"""
表示层：命令行入口。
"""
