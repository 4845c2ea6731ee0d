"""
Microsoft Planner integration.

Authenticates with Microsoft Entra ID using the client credentials flow and
probes the Microsoft Graph Planner API (groups, plans, tasks) behind a small
HTTP server.
"""
