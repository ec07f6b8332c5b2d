"""Stock Monitor - live quotes table and weekly price chart."""
