"""App Django de Tickets."""
