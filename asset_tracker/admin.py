from django.contrib import admin

# Customize admin site
admin.site.site_header = "Asset Tracker - Admin Panel"
admin.site.site_title = "Asset Tracker Admin"
admin.site.index_title = "IT Asset Administration"
