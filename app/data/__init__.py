"""Sample mapping data used to seed empty stores."""
