"""Small demo application exercising windows, dialogs and close guards."""
