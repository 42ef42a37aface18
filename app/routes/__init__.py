# WorkHours - HTTP Routes
