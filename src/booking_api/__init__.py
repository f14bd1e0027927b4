"""HTTP surface for the guest details booking form."""
