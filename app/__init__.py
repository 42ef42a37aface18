# WorkHours - Approved work hours summary service
