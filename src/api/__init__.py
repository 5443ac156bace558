"""REST proxy between the dashboard and the Google Ads API."""
