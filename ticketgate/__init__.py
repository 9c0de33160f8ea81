"""ticketgate - CI gate that checks PR titles/branches against Jira tickets."""

__version__ = "0.1.0"
